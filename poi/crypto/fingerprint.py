"""
128-bit sentence fingerprints for duplicate detection.

Two independent FNV-1a lanes run over the same bytes. Each lane has its own
offset basis and its own odd 64-bit multiplier, so a collision has to hit
both lanes at once.
"""

from __future__ import annotations

from typing import Tuple

__all__ = ["Fingerprint", "sentence_fingerprint"]

Fingerprint = Tuple[int, int]

_MASK64 = (1 << 64) - 1

_LANE1_BASIS = 0xCBF29CE484222325
_LANE1_PRIME = 0x100000001B3

_LANE2_BASIS = 0x6C62272E07BB0142
_LANE2_PRIME = 0x9E3779B97F4A7C15


def sentence_fingerprint(data: bytes) -> Fingerprint:
    """Return the (lane1, lane2) fingerprint of ``data``."""
    h1 = _LANE1_BASIS
    h2 = _LANE2_BASIS
    for b in data:
        h1 = ((h1 ^ b) * _LANE1_PRIME) & _MASK64
        h2 = ((h2 ^ b) * _LANE2_PRIME) & _MASK64
    return h1, h2
