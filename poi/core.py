"""
Core data model for Proof of Inference.

Everything here is an immutable value. The surrounding ledger owns the
lifecycle of these records; the verification and economics functions only
read them (or return new ones).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

SEED_SIZE = 32
DIGEST_SIZE = 32


def _require_bytes32(name: str, value: bytes) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {value!r:.40}")


@dataclass(frozen=True)
class RequiredWordSet:
    """
    Ordered, duplicate-free subset of the lexicon.

    Word ``i`` must appear in a text strictly before word ``i + 1``.
    """

    words: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        if len(set(self.words)) != len(self.words):
            raise ValueError("required words must be pairwise distinct")

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.words)

    def __getitem__(self, index: int) -> bytes:
        return self.words[index]

    def as_strings(self) -> Tuple[str, ...]:
        return tuple(w.decode("ascii") for w in self.words)


@dataclass(frozen=True)
class ClockReading:
    """Ledger clock: a monotonic slot counter plus unix time."""

    slot: int
    unix_timestamp: int


@dataclass(frozen=True)
class EpochParameters:
    """
    Snapshot of the active epoch.

    Attributes:
        difficulty: Required leading zero bits; also drives the word count
        epoch_number: Monotonically increasing epoch index
        epoch_start: Unix time the epoch opened
        epoch_end: Unix time the epoch closes (exclusive)
        challenge_seed: 32-byte seed for word derivation and hashing
    """

    difficulty: int
    epoch_number: int
    epoch_start: int
    epoch_end: int
    challenge_seed: bytes

    def __post_init__(self) -> None:
        _require_bytes32("challenge_seed", self.challenge_seed)
        if self.difficulty < 0:
            raise ValueError(f"difficulty must be >= 0, got {self.difficulty}")
        if self.epoch_number < 0:
            raise ValueError(f"epoch_number must be >= 0, got {self.epoch_number}")
        if self.epoch_end < self.epoch_start:
            raise ValueError("epoch_end must not precede epoch_start")

    def is_active(self, unix_timestamp: int) -> bool:
        """True while submissions are accepted for this epoch."""
        return unix_timestamp < self.epoch_end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "epoch_number": self.epoch_number,
            "epoch_start": self.epoch_start,
            "epoch_end": self.epoch_end,
            "challenge_seed": self.challenge_seed.hex(),
        }


@dataclass(frozen=True)
class SubmissionRecord:
    """An accepted solution as stored by the ledger."""

    miner: bytes
    epoch: int
    nonce: int
    digest: bytes

    def __post_init__(self) -> None:
        _require_bytes32("digest", self.digest)
        if not 0 <= self.nonce < 1 << 64:
            raise ValueError(f"nonce must fit in 64 bits, got {self.nonce}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "miner": self.miner.hex(),
            "epoch": self.epoch,
            "nonce": self.nonce,
            "digest": self.digest.hex(),
        }


@dataclass(frozen=True)
class EmissionState:
    """
    Cumulative emission counters.

    ``total_supply`` never exceeds the configured max supply and never
    decreases.
    """

    total_accepted_solutions: int = 0
    total_supply: int = 0

    def __post_init__(self) -> None:
        if self.total_accepted_solutions < 0 or self.total_supply < 0:
            raise ValueError("emission counters must be non-negative")
