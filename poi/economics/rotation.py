"""
Epoch rotation.

Exactly one rotation applies per epoch, strictly after the epoch's end
time. The caller guarantees single-writer semantics; nothing here detects a
second rotation of the same epoch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from poi.config import ProtocolConfig, get_config
from poi.core import SEED_SIZE, ClockReading, EmissionState, EpochParameters
from poi.crypto.hashing import hash_parts, i64_le, u64_le
from poi.economics.difficulty import adjust_difficulty
from poi.economics.emission import capped_reward
from poi.errors import EpochNotEndedError

__all__ = ["EpochRotation", "next_seed", "initial_epoch", "rotate_epoch"]

logger = logging.getLogger(__name__)


def next_seed(
    previous_seed: bytes,
    epoch_number: int,
    timestamp: int,
    slot: int,
    config: Optional[ProtocolConfig] = None,
) -> bytes:
    """
    Derive the next challenge seed.

    H(previous_seed || timestamp (i64 LE) || epoch_number (u64 LE) || slot (u64 LE)).
    The slot is only known once the rotation lands, which keeps the next
    seed unpredictable ahead of time.
    """
    if len(previous_seed) != SEED_SIZE:
        raise ValueError(f"previous_seed must be {SEED_SIZE} bytes, got {len(previous_seed)}")
    return hash_parts(
        previous_seed,
        i64_le(timestamp),
        u64_le(epoch_number),
        u64_le(slot),
        config=config,
    )


@dataclass(frozen=True)
class EpochRotation:
    """Outcome of closing one epoch and opening the next."""

    previous: EpochParameters
    current: EpochParameters
    solution_count: int
    next_reward: int

    @property
    def difficulty_delta(self) -> int:
        return self.current.difficulty - self.previous.difficulty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "closed_epoch": self.previous.epoch_number,
            "solution_count": self.solution_count,
            "old_difficulty": self.previous.difficulty,
            "new_difficulty": self.current.difficulty,
            "new_seed": self.current.challenge_seed.hex(),
            "epoch_start": self.current.epoch_start,
            "epoch_end": self.current.epoch_end,
            "next_reward": self.next_reward,
        }


def initial_epoch(
    seed: bytes,
    clock: ClockReading,
    config: Optional[ProtocolConfig] = None,
) -> EpochParameters:
    """Parameters of epoch 0 opened at ``clock``."""
    cfg = config or get_config()
    return EpochParameters(
        difficulty=cfg.initial_difficulty,
        epoch_number=0,
        epoch_start=clock.unix_timestamp,
        epoch_end=clock.unix_timestamp + cfg.epoch_duration,
        challenge_seed=seed,
    )


def rotate_epoch(
    params: EpochParameters,
    solution_count: int,
    clock: ClockReading,
    emission: Optional[EmissionState] = None,
    config: Optional[ProtocolConfig] = None,
) -> EpochRotation:
    """
    Close ``params`` and open the next epoch.

    Args:
        params: The closing epoch
        solution_count: Accepted solutions counted externally for it
        clock: Ledger clock at rotation time
        emission: Emission counters, used to report the next reward
        config: Protocol config

    Raises:
        EpochNotEndedError: If ``clock`` is before the closing epoch's end
    """
    cfg = config or get_config()
    if clock.unix_timestamp < params.epoch_end:
        raise EpochNotEndedError(
            f"epoch {params.epoch_number} ends at {params.epoch_end}, "
            f"now {clock.unix_timestamp}"
        )

    difficulty = adjust_difficulty(params.difficulty, solution_count, config=cfg)
    seed = next_seed(
        params.challenge_seed,
        params.epoch_number,
        clock.unix_timestamp,
        clock.slot,
        config=cfg,
    )
    current = EpochParameters(
        difficulty=difficulty,
        epoch_number=params.epoch_number + 1,
        epoch_start=clock.unix_timestamp,
        epoch_end=clock.unix_timestamp + cfg.epoch_duration,
        challenge_seed=seed,
    )
    next_reward = capped_reward(emission or EmissionState(), config=cfg)

    logger.info(
        "rotated epoch %d -> %d: solutions=%d difficulty %d -> %d",
        params.epoch_number,
        current.epoch_number,
        solution_count,
        params.difficulty,
        difficulty,
    )
    return EpochRotation(
        previous=params,
        current=current,
        solution_count=solution_count,
        next_reward=next_reward,
    )
