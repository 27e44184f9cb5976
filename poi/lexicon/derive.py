"""
Challenge derivation: seed + difficulty -> ordered required words.

Word ``i`` is picked by reading seed bytes ``2i`` and ``2i + 1`` as a
big-endian 16-bit integer and reducing it modulo the lexicon size. Collisions
with earlier picks probe forward (wrapping) to the next unused entry.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from poi.core import SEED_SIZE, RequiredWordSet
from poi.lexicon.wordlist import LEXICON

__all__ = [
    "MIN_REQUIRED_WORDS",
    "MAX_REQUIRED_WORDS",
    "WORD_COUNT_STEPS",
    "word_count_for_difficulty",
    "derive_required_words",
]

MIN_REQUIRED_WORDS = 3
MAX_REQUIRED_WORDS = 8

# (highest difficulty, word count); anything above the last step gets the max
WORD_COUNT_STEPS: Tuple[Tuple[int, int], ...] = (
    (10, 3),
    (15, 4),
    (20, 5),
    (30, 6),
    (40, 7),
)


def word_count_for_difficulty(difficulty: int) -> int:
    """Map a difficulty to the number of required words (3..8)."""
    for ceiling, count in WORD_COUNT_STEPS:
        if difficulty <= ceiling:
            return count
    return MAX_REQUIRED_WORDS


def derive_required_words(
    seed: bytes,
    difficulty: int,
    lexicon: Sequence[str] = LEXICON,
) -> RequiredWordSet:
    """
    Derive the required words for ``(seed, difficulty)``.

    Args:
        seed: 32-byte challenge seed
        difficulty: Current epoch difficulty
        lexicon: Candidate words; the production lexicon by default

    Returns:
        RequiredWordSet whose length is ``word_count_for_difficulty(difficulty)``,
        or shorter if the lexicon runs out of unused entries.
    """
    if len(seed) != SEED_SIZE:
        raise ValueError(f"seed must be {SEED_SIZE} bytes, got {len(seed)}")
    if not lexicon:
        return RequiredWordSet(words=())

    size = len(lexicon)
    count = word_count_for_difficulty(difficulty)
    used = [False] * size
    picked = []

    for i in range(count):
        raw = (seed[2 * i] << 8) | seed[2 * i + 1]
        idx = raw % size

        tries = 0
        while used[idx] and tries < size:
            idx = (idx + 1) % size
            tries += 1
        if tries >= size:
            break

        used[idx] = True
        picked.append(lexicon[idx].encode("ascii"))

    return RequiredWordSet(words=tuple(picked))
