"""
Natural-language text constraint verification.

A candidate text is accepted only if every one of the following holds. All of
them are decided in one linear pass over the bytes with bounded state: a
256-bit presence bitmap, a fixed number of counters, the required-word
matcher and a fixed-capacity sentence fingerprint table.

    length              min_text_length <= len <= max_text_length
    charset             every byte <= 127
    byte diversity      >= min_distinct_bytes distinct byte values
    vowel ratio         vowels / letters within vowel_percent_band
    space ratio         b" " count / len within space_percent_band
    consonant runs      longest run <= max_consonant_run and
                        average run < max_consonant_average_tenths / 10
    bigrams             each tracked bigram seen >= min_bigram_count times
    sentences           every sentence has min..max words; at least
                        min_sentences sentences, one ending in '?', one short
                        and one long; no repeated sentence among the first
                        fingerprint_capacity sentences
    required words      in order, as whole words, case-insensitive, with at
                        least required_word_gap bytes between one accepted
                        match's end and the next match's start

The verdict is a bare boolean. The first failing rule is logged at DEBUG for
operators only.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from poi.config import ProtocolConfig, get_config
from poi.crypto.fingerprint import Fingerprint, sentence_fingerprint

__all__ = ["verify_text"]

logger = logging.getLogger(__name__)

TextLike = Union[bytes, bytearray, memoryview, str]
WordLike = Union[bytes, bytearray, str]

_TO_LOWER = bytes(b + 32 if 65 <= b <= 90 else b for b in range(256))
_IS_ALPHA = tuple((65 <= b <= 90) or (97 <= b <= 122) for b in range(256))
_IS_VOWEL = tuple(chr(b) in "aeiouAEIOU" for b in range(256))
_IS_WHITESPACE = tuple(b in (0x20, 0x09, 0x0A, 0x0D) for b in range(256))
_IS_SENTENCE_END = tuple(b in (0x2E, 0x21, 0x3F) for b in range(256))

_SPACE = 0x20
_QUESTION = 0x3F


def _as_bytes(text: TextLike) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def _lower_words(words: Iterable[WordLike]) -> List[bytes]:
    lowered = []
    for word in words:
        raw = word.encode("ascii") if isinstance(word, str) else bytes(word)
        lowered.append(raw.translate(_TO_LOWER))
    return lowered


def _first_violation(
    text: bytes,
    required_words: List[bytes],
    cfg: ProtocolConfig,
) -> Optional[str]:
    """Scan ``text`` once; return the name of the first failing rule or None."""
    n = len(text)
    if n < cfg.min_text_length or n > cfg.max_text_length:
        return "length"

    letter_count = 0
    vowel_count = 0
    space_count = 0

    # 256-bit presence bitmap as 4 x 64-bit words
    presence = [0, 0, 0, 0]

    bigram_slots = {}
    for slot, pair in enumerate(cfg.tracked_bigrams):
        lo = pair.lower().encode("ascii")
        bigram_slots[(lo[0] << 8) | lo[1]] = slot
    bigram_counts = [0] * len(bigram_slots)
    prev_lower = 0

    cons_run = 0
    cons_max = 0
    cons_total = 0
    cons_runs = 0

    words_in_sentence = 0
    in_word = False
    sentence_count = 0
    has_question = False
    has_short = False
    has_long = False
    sentence_start = 0
    sentence_started = False

    capacity = cfg.fingerprint_capacity
    fingerprints: List[Optional[Fingerprint]] = [None] * capacity
    fingerprint_count = 0

    rw_total = len(required_words)
    rw_idx = 0
    rw_match = 0
    rw_match_start = 0
    last_rw_end = 0
    has_rw_match = False
    gap = cfg.required_word_gap

    view = memoryview(text)

    for i in range(n):
        b = text[i]
        if b > 127:
            return "charset"

        lower = _TO_LOWER[b]
        alpha = _IS_ALPHA[b]
        vowel = _IS_VOWEL[b]
        ws = _IS_WHITESPACE[b]
        sent_end = _IS_SENTENCE_END[b]

        presence[b >> 6] |= 1 << (b & 63)

        if alpha:
            letter_count += 1
            if vowel:
                vowel_count += 1
        if b == _SPACE:
            space_count += 1

        if alpha and not vowel:
            cons_run += 1
        elif cons_run:
            if cons_run > cons_max:
                cons_max = cons_run
            cons_total += cons_run
            cons_runs += 1
            cons_run = 0

        if i > 0:
            slot = bigram_slots.get((prev_lower << 8) | lower)
            if slot is not None:
                bigram_counts[slot] += 1
        prev_lower = lower

        if ws or sent_end:
            in_word = False
        elif not in_word:
            in_word = True
            words_in_sentence += 1

        if not sentence_started and not ws and not sent_end:
            sentence_start = i
            sentence_started = True

        # Required-word matcher. A byte that breaks or completes a match is
        # re-examined as a possible first letter of the word now pursued.
        if rw_idx < rw_total:
            word = required_words[rw_idx]
            if word and lower == word[rw_match]:
                if rw_match == 0:
                    rw_match_start = i
                rw_match += 1
                if rw_match == len(word):
                    before_ok = rw_match_start == 0 or not _IS_ALPHA[text[rw_match_start - 1]]
                    after_ok = i + 1 >= n or not _IS_ALPHA[text[i + 1]]
                    if before_ok and after_ok:
                        if not (has_rw_match and rw_match_start < last_rw_end + gap):
                            last_rw_end = i + 1
                            has_rw_match = True
                            rw_idx += 1
                    rw_match = 0
                    if rw_idx < rw_total:
                        following = required_words[rw_idx]
                        if following and lower == following[0]:
                            rw_match_start = i
                            rw_match = 1
            elif rw_match:
                rw_match = 0
                if word and lower == word[0]:
                    rw_match_start = i
                    rw_match = 1

        if sent_end and words_in_sentence and sentence_started:
            if not cfg.min_sentence_words <= words_in_sentence <= cfg.max_sentence_words:
                return "sentence_length"
            if b == _QUESTION:
                has_question = True
            if words_in_sentence <= cfg.short_sentence_words:
                has_short = True
            if words_in_sentence >= cfg.long_sentence_words:
                has_long = True

            # Only the first `capacity` sentences are fingerprinted.
            if fingerprint_count < capacity:
                fp = sentence_fingerprint(view[sentence_start:i + 1])
                for j in range(fingerprint_count):
                    if fingerprints[j] == fp:
                        return "duplicate_sentence"
                fingerprints[fingerprint_count] = fp
                fingerprint_count += 1
            sentence_count += 1

            words_in_sentence = 0
            in_word = False
            sentence_started = False

    if cons_run:
        if cons_run > cons_max:
            cons_max = cons_run
        cons_total += cons_run
        cons_runs += 1

    if rw_idx < rw_total:
        return "required_words"

    if sentence_count < cfg.min_sentences:
        return "sentence_count"
    if not has_question:
        return "question"
    if not has_short:
        return "short_sentence"
    if not has_long:
        return "long_sentence"

    if letter_count == 0:
        return "vowel_ratio"
    vowel_lo, vowel_hi = cfg.vowel_percent_band
    if vowel_count * 100 < vowel_lo * letter_count or vowel_count * 100 > vowel_hi * letter_count:
        return "vowel_ratio"

    space_lo, space_hi = cfg.space_percent_band
    if space_count * 100 < space_lo * n or space_count * 100 > space_hi * n:
        return "space_ratio"

    if cons_max > cfg.max_consonant_run:
        return "consonant_run"
    if cons_runs and cons_total * 10 >= cfg.max_consonant_average_tenths * cons_runs:
        return "consonant_average"

    for count in bigram_counts:
        if count < cfg.min_bigram_count:
            return "bigrams"

    distinct = sum(bin(word).count("1") for word in presence)
    if distinct < cfg.min_distinct_bytes:
        return "byte_diversity"

    return None


def verify_text(
    text: TextLike,
    required_words: Iterable[WordLike],
    config: Optional[ProtocolConfig] = None,
) -> bool:
    """
    Verify that ``text`` satisfies every natural-language constraint.

    Args:
        text: Candidate text (``str`` is UTF-8 encoded first)
        required_words: Ordered required words, e.g. a RequiredWordSet
        config: Protocol config; the process-wide config by default

    Returns:
        True if the text is accepted
    """
    cfg = config or get_config()
    violation = _first_violation(_as_bytes(text), _lower_words(required_words), cfg)
    if violation is not None:
        logger.debug("text rejected: %s", violation)
        return False
    return True
