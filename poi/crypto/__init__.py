"""Hashing and fingerprint primitives."""

from poi.crypto.fingerprint import Fingerprint, sentence_fingerprint
from poi.crypto.hashing import (
    NONCE_SEPARATOR,
    genesis_seed,
    hash_parts,
    i64_le,
    solution_digest,
    u64_le,
)

__all__ = [
    "Fingerprint",
    "NONCE_SEPARATOR",
    "genesis_seed",
    "hash_parts",
    "i64_le",
    "sentence_fingerprint",
    "solution_digest",
    "u64_le",
]
