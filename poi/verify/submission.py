"""
Submission verdicts.

A submission is accepted when its text satisfies the constraints derived
from the epoch's seed and difficulty AND its solution digest meets the
difficulty. Every function here is pure over its arguments, so independent
submissions can be verified concurrently without coordination.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from poi.config import ProtocolConfig, get_config
from poi.core import EpochParameters, SubmissionRecord
from poi.crypto.hashing import solution_digest
from poi.lexicon.derive import derive_required_words
from poi.verify.pow import check_difficulty
from poi.verify.text import verify_text

__all__ = [
    "Submission",
    "verify_submission",
    "evaluate_submission",
    "verify_batch",
    "mine_nonce",
]

logger = logging.getLogger(__name__)

_U64_LIMIT = 1 << 64


@dataclass(frozen=True)
class Submission:
    """A candidate solution as sent by a miner."""

    miner: bytes
    text: bytes
    nonce: int


def _text_bytes(text: Union[bytes, str]) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else bytes(text)


def evaluate_submission(
    params: EpochParameters,
    miner: bytes,
    text: Union[bytes, str],
    nonce: int,
    config: Optional[ProtocolConfig] = None,
) -> Optional[SubmissionRecord]:
    """
    Verify a submission and build its record.

    Returns:
        SubmissionRecord if accepted, otherwise None
    """
    cfg = config or get_config()
    if not 0 <= nonce < _U64_LIMIT:
        return None
    body = _text_bytes(text)

    required = derive_required_words(params.challenge_seed, params.difficulty)
    if not verify_text(body, required, config=cfg):
        return None

    digest = solution_digest(params.challenge_seed, miner, body, nonce, config=cfg)
    if not check_difficulty(digest, params.difficulty):
        return None

    return SubmissionRecord(miner=miner, epoch=params.epoch_number, nonce=nonce, digest=digest)


def verify_submission(
    params: EpochParameters,
    miner: bytes,
    text: Union[bytes, str],
    nonce: int,
    config: Optional[ProtocolConfig] = None,
) -> bool:
    """Accept/reject a submission against the epoch snapshot ``params``."""
    return evaluate_submission(params, miner, text, nonce, config=config) is not None


def verify_batch(
    params: EpochParameters,
    submissions: Sequence[Submission],
    max_workers: int = 4,
    config: Optional[ProtocolConfig] = None,
) -> List[bool]:
    """
    Verify independent submissions concurrently.

    Returns:
        Verdicts in the same order as ``submissions``
    """
    cfg = config or get_config()
    if not submissions:
        return []

    def _one(sub: Submission) -> bool:
        return verify_submission(params, sub.miner, sub.text, sub.nonce, config=cfg)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        verdicts = list(executor.map(_one, submissions))

    logger.debug(
        "verified batch of %d submissions for epoch %d: %d accepted",
        len(verdicts),
        params.epoch_number,
        sum(verdicts),
    )
    return verdicts


def mine_nonce(
    seed: bytes,
    miner: bytes,
    text: Union[bytes, str],
    difficulty: int,
    start: int = 0,
    limit: int = 1 << 20,
    config: Optional[ProtocolConfig] = None,
) -> Optional[int]:
    """
    Search nonces ``start, start + 1, ...`` for one meeting ``difficulty``.

    Args:
        seed: Epoch challenge seed
        miner: Miner identity
        text: Candidate text (not checked here)
        difficulty: Required leading zero bits
        start: First nonce to try
        limit: Maximum number of nonces to try

    Returns:
        The first satisfying nonce, or None if the search space is exhausted
    """
    cfg = config or get_config()
    body = _text_bytes(text)
    stop = min(start + limit, _U64_LIMIT)
    for nonce in range(start, stop):
        digest = solution_digest(seed, miner, body, nonce, config=cfg)
        if check_difficulty(digest, difficulty):
            return nonce
    return None
