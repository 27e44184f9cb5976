"""Lexicon and required-word derivation."""

from poi.lexicon.derive import (
    MAX_REQUIRED_WORDS,
    MIN_REQUIRED_WORDS,
    derive_required_words,
    word_count_for_difficulty,
)
from poi.lexicon.wordlist import LEXICON, LEXICON_SIZE, lexicon_word

__all__ = [
    "LEXICON",
    "LEXICON_SIZE",
    "MAX_REQUIRED_WORDS",
    "MIN_REQUIRED_WORDS",
    "derive_required_words",
    "lexicon_word",
    "word_count_for_difficulty",
]
