"""
Leading-zero-bits proof-of-work check.

A digest satisfies difficulty ``d`` when its first ``d`` bits, most
significant bit of byte 0 first, are all zero.
"""

from __future__ import annotations

from poi.core import DIGEST_SIZE

__all__ = ["check_difficulty", "leading_zero_bits"]

_MAX_BITS = DIGEST_SIZE * 8


def check_difficulty(digest: bytes, difficulty: int) -> bool:
    """
    Check whether ``digest`` meets ``difficulty``.

    Difficulty 0 always passes and difficulty >= 256 always fails.
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    if difficulty < 0:
        raise ValueError(f"difficulty must be >= 0, got {difficulty}")
    if difficulty == 0:
        return True
    if difficulty >= _MAX_BITS:
        return False

    full_bytes, remaining_bits = divmod(difficulty, 8)
    for i in range(full_bytes):
        if digest[i] != 0:
            return False
    if remaining_bits:
        mask = (0xFF << (8 - remaining_bits)) & 0xFF
        if digest[full_bytes] & mask:
            return False
    return True


def leading_zero_bits(digest: bytes) -> int:
    """Count the leading zero bits of ``digest`` (256 for an all-zero digest)."""
    value = int.from_bytes(digest, "big")
    return len(digest) * 8 - value.bit_length()
