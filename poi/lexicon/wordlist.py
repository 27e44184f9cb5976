"""
Lexicon of candidate required words.

200 common English words of 4-8 lowercase ASCII letters. The order is part
of the protocol: challenge derivation indexes into it, so entries must never
be reordered, inserted or removed without a protocol version bump.
"""

from __future__ import annotations

from typing import Tuple

__all__ = ["LEXICON", "LEXICON_SIZE", "MIN_WORD_LENGTH", "MAX_WORD_LENGTH", "lexicon_word"]

MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = 8

LEXICON: Tuple[str, ...] = (
    # Nouns
    "time", "life", "world", "place", "water", "light", "house", "music", "power", "dream",
    "heart", "earth", "ocean", "river", "cloud", "stone", "flame", "voice", "night", "field",
    "space", "brain", "truth", "peace", "storm", "tower", "plant", "metal", "glass", "wheel",
    "bridge", "forest", "garden", "market", "island", "desert", "silver", "shadow", "spirit", "nature",
    "energy", "future", "memory", "moment", "season", "winter", "summer", "signal", "system", "design",
    "method", "reason", "answer", "letter", "person", "animal", "flower", "morning", "evening", "journey",
    "history", "culture", "balance", "freedom", "pattern", "shelter", "surface", "chapter", "element", "silence",
    # Verbs
    "think", "learn", "build", "write", "speak", "dance", "climb", "watch", "shine", "carry",
    "drive", "paint", "teach", "reach", "solve", "share", "trust", "guide", "shape", "craft",
    "chase", "drift", "weave", "bloom", "grasp", "shift", "sweep", "trace", "wander", "gather",
    "create", "follow", "listen", "notice", "wonder", "happen", "become", "remain", "travel", "return",
    "search", "reveal", "explore", "imagine", "connect", "protect", "reflect", "develop", "consider", "discover",
    # Adjectives
    "bright", "quiet", "gentle", "strong", "simple", "hidden", "golden", "silent", "frozen", "bitter",
    "tender", "vivid", "subtle", "fierce", "humble", "steady", "clever", "honest", "broken", "sacred",
    "unique", "global", "active", "native", "smooth", "narrow", "liquid", "mental", "social", "visual",
    "formal", "casual", "proper", "remote", "secure", "stable", "cosmic", "ancient", "modern", "natural",
    "digital", "central", "special", "private", "perfect", "strange", "careful", "curious", "distant", "endless",
    # Adverbs
    "often", "never", "always", "slowly", "deeply", "gently", "simply", "nearly", "barely", "mostly",
    "partly", "surely", "truly", "fully", "quite", "still", "maybe", "hence", "twice", "ahead",
    "apart", "aside", "along", "after", "again", "early", "later", "since", "almost", "around",
)

LEXICON_SIZE = len(LEXICON)


def lexicon_word(index: int) -> bytes:
    """Return the lexicon entry at ``index`` as ASCII bytes."""
    return LEXICON[index].encode("ascii")


def _check_lexicon() -> None:
    if len(set(LEXICON)) != LEXICON_SIZE:
        raise RuntimeError("lexicon entries must be unique")
    for word in LEXICON:
        if not (MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH) or not (
            word.isascii() and word.isalpha() and word.islower()
        ):
            raise RuntimeError(f"invalid lexicon entry {word!r}")


_check_lexicon()
