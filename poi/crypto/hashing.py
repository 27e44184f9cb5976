"""
Hash primitives for Proof of Inference.

The hash function itself is a black box selected by
``ProtocolConfig.hash_algorithm`` (any ``hashlib`` algorithm with a 32-byte
digest). This module fixes the byte layout of every hashed preimage:

- solution digest:  seed || miner || text || b"||" || nonce (u64 LE)
- genesis seed:     slot (u64 LE) || timestamp (i64 LE) || state key
- rotated seed:     previous seed || timestamp (i64 LE) || epoch (u64 LE) || slot (u64 LE)
"""

from __future__ import annotations

import hashlib
from typing import Optional, Union

from poi.config import ProtocolConfig, get_config
from poi.core import DIGEST_SIZE, SEED_SIZE

__all__ = [
    "NONCE_SEPARATOR",
    "u64_le",
    "i64_le",
    "hash_parts",
    "solution_digest",
    "genesis_seed",
]

NONCE_SEPARATOR = b"||"

BytesLike = Union[bytes, bytearray, memoryview]


def u64_le(value: int) -> bytes:
    """Encode an unsigned 64-bit integer little-endian."""
    return value.to_bytes(8, "little", signed=False)


def i64_le(value: int) -> bytes:
    """Encode a signed 64-bit integer little-endian."""
    return value.to_bytes(8, "little", signed=True)


def hash_parts(*parts: BytesLike, config: Optional[ProtocolConfig] = None) -> bytes:
    """
    Hash the concatenation of ``parts``.

    Args:
        *parts: Byte strings hashed in order, without separators
        config: Protocol config (selects the algorithm)

    Returns:
        32-byte digest
    """
    cfg = config or get_config()
    h = hashlib.new(cfg.hash_algorithm)
    for part in parts:
        h.update(part)
    digest = h.digest()
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"hash_algorithm {cfg.hash_algorithm!r} returned {len(digest)} bytes"
        )
    return digest


def solution_digest(
    seed: bytes,
    miner: bytes,
    text: bytes,
    nonce: int,
    config: Optional[ProtocolConfig] = None,
) -> bytes:
    """
    Compute the proof-of-work digest of a submission.

    Args:
        seed: 32-byte challenge seed of the epoch
        miner: Submitter identity bytes
        text: Candidate text bytes
        nonce: 64-bit unsigned nonce

    Returns:
        32-byte digest checked against the difficulty
    """
    if len(seed) != SEED_SIZE:
        raise ValueError(f"seed must be {SEED_SIZE} bytes, got {len(seed)}")
    return hash_parts(seed, miner, text, NONCE_SEPARATOR, u64_le(nonce), config=config)


def genesis_seed(
    slot: int,
    timestamp: int,
    state_key: bytes,
    config: Optional[ProtocolConfig] = None,
) -> bytes:
    """Derive the first challenge seed when the mining state is created."""
    return hash_parts(u64_le(slot), i64_le(timestamp), state_key, config=config)
