from dataclasses import replace

import pytest

from poi.config import DEFAULT_CONFIG
from poi.crypto.fingerprint import sentence_fingerprint
from poi.verify.text import verify_text

WEATHER_NATURE = [b"weather", b"nature"]


def test_crafted_text_accepted(two_sentence_text):
    assert len(two_sentence_text) == 303
    assert verify_text(two_sentence_text, WEATHER_NATURE)


def test_str_input_and_case_insensitive_words(two_sentence_text):
    assert verify_text(two_sentence_text.decode("ascii"), ["WEATHER", "Nature"])


def test_no_required_words(two_sentence_text):
    assert verify_text(two_sentence_text, [])


def test_length_255_rejected(two_sentence_text):
    assert not verify_text(two_sentence_text[:255], WEATHER_NATURE)


def test_length_above_max_rejected(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, max_text_length=300)
    assert not verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


def test_reordered_words_rejected(two_sentence_text):
    assert not verify_text(two_sentence_text, [b"nature", b"weather"])


def test_missing_word_rejected(two_sentence_text):
    assert not verify_text(two_sentence_text, [b"weather", b"blockchain"])


def test_duplicate_sentence_rejected(two_sentence_text):
    text = two_sentence_text + b" Where does Nature hide her answers for curious people, Jack?"
    assert not verify_text(text, WEATHER_NATURE)


def test_duplicates_beyond_fingerprint_capacity_not_detected(two_sentence_text):
    # Only the first sentence is fingerprinted; the repeat of the second slips through.
    text = two_sentence_text + b" Where does Nature hide her answers for curious people, Jack?"
    cfg = replace(DEFAULT_CONFIG, fingerprint_capacity=1)
    assert verify_text(text, WEATHER_NATURE, config=cfg)


def test_standalone_word_after_substring(other_the_text):
    assert verify_text(other_the_text, [b"the"])


def test_substring_does_not_satisfy_word(other_the_text):
    text = other_the_text.replace(b"each other the whole winter", b"each other all winter long")
    assert verify_text(text, [])
    assert not verify_text(text, [b"the"])


def test_gap_too_small_rejected(two_sentence_text):
    # "northern" starts 12 bytes after "weather" ends and never reappears.
    assert not verify_text(two_sentence_text, [b"weather", b"northern"])


def test_too_close_occurrence_skipped_for_later_one(two_sentence_text):
    # The first standalone "the" after "weather" is too close; a later one counts.
    assert verify_text(two_sentence_text, [b"weather", b"the"])


def test_gap_is_configurable(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, required_word_gap=10)
    assert verify_text(two_sentence_text, [b"weather", b"northern"], config=cfg)


def test_non_ascii_rejected(two_sentence_text):
    text = two_sentence_text.decode("ascii").replace("Jack", "Jäck")
    assert not verify_text(text, WEATHER_NATURE)


def test_missing_question_rejected(two_sentence_text):
    assert not verify_text(two_sentence_text[:-1] + b".", WEATHER_NATURE)


def test_sentence_word_bounds(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, max_sentence_words=30)
    assert not verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


def test_long_sentence_required(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, long_sentence_words=35)
    assert not verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


def test_sentence_count_required(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, min_sentences=3)
    assert not verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


@pytest.mark.parametrize(
    "overrides",
    [
        {"vowel_percent_band": (40, 48)},
        {"vowel_percent_band": (30, 35)},
        {"space_percent_band": (15, 22)},
        {"space_percent_band": (12, 14)},
        {"max_consonant_run": 2},
        {"max_consonant_average_tenths": 15},
        {"min_bigram_count": 4},
        {"min_distinct_bytes": 32},
    ],
)
def test_statistical_thresholds(two_sentence_text, overrides):
    assert verify_text(two_sentence_text, WEATHER_NATURE)
    cfg = replace(DEFAULT_CONFIG, **overrides)
    assert not verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


def test_distinct_bytes_threshold_inclusive(two_sentence_text):
    cfg = replace(DEFAULT_CONFIG, min_distinct_bytes=31)
    assert verify_text(two_sentence_text, WEATHER_NATURE, config=cfg)


def test_consonant_gibberish_rejected():
    consonants = b"bcdfghjklmnpqrstvwxyz"
    out = bytearray()
    for i in range(300):
        if i % 7 == 0:
            out.append(ord(" "))
        elif i % 50 == 49:
            out.append(ord("."))
        else:
            out.append(consonants[i % len(consonants)])
    assert not verify_text(bytes(out), [])


def test_multi_sentence_text_accepted(village_text):
    assert verify_text(village_text, [b"morning", b"nature", b"ancient"])
    assert not verify_text(
        village_text.replace(b"Near the ancient mill", b"Near that old mill"),
        [b"morning", b"nature", b"ancient"],
    )


def test_fingerprint_lanes_differ():
    h1, h2 = sentence_fingerprint(b"The morning air felt crisp.")
    assert h1 != h2
    assert sentence_fingerprint(b"") == (0xCBF29CE484222325, 0x6C62272E07BB0142)
    assert sentence_fingerprint(b"abc") != sentence_fingerprint(b"acb")
    assert sentence_fingerprint(memoryview(b"abc")) == sentence_fingerprint(b"abc")


VILLAGE_WORDS = [b"morning", b"nature", b"ancient"]

EXTRA_SENTENCES = (
    b" Farmers returned home before sunset, carrying baskets of apples and talking"
    b" about the harvest festival planned for the coming week. Their dogs followed"
    b" closely behind, barking at every bird that crossed the narrow path near the"
    b" old stone wall. Would anyone remember this gentle season when winter finally"
    b" arrived? Most people believed they would."
)


def test_sentence_below_min_words_rejected(village_text):
    assert verify_text(village_text + b" Soft rain fell over hills.", VILLAGE_WORDS)
    assert not verify_text(village_text + b" Rain fell over hills.", VILLAGE_WORDS)
    assert not verify_text(village_text + b" Rain fell.", VILLAGE_WORDS)


@pytest.mark.parametrize("separator", [b"\t", b"\n"])
def test_only_space_byte_counts_toward_space_ratio(two_sentence_text, separator):
    # 36 spaces out of 303 bytes is below the 12% floor.
    text = two_sentence_text.replace(b" ", separator, 7)
    assert not verify_text(text, WEATHER_NATURE)
    cfg = replace(DEFAULT_CONFIG, space_percent_band=(0, 22))
    assert verify_text(text, WEATHER_NATURE, config=cfg)


def test_length_upper_bound_inclusive(village_text):
    body = village_text + EXTRA_SENTENCES
    assert len(body) < DEFAULT_CONFIG.max_text_length
    assert verify_text(body.ljust(DEFAULT_CONFIG.max_text_length), VILLAGE_WORDS)
    assert not verify_text(body.ljust(DEFAULT_CONFIG.max_text_length + 1), VILLAGE_WORDS)


def test_default_consonant_run_limit(village_text):
    # "ngths" is a run of five consonants, "tchstr" a run of six.
    assert verify_text(village_text.replace(b"small gifts", b"small strengths"), VILLAGE_WORDS)
    assert not verify_text(
        village_text.replace(b"small gifts", b"small latchstrings"), VILLAGE_WORDS
    )


def test_terminator_without_words_is_not_a_sentence(two_sentence_text):
    text = two_sentence_text.replace(b"bridge.", b"bridge...")
    assert verify_text(text, WEATHER_NATURE)
    cfg = replace(DEFAULT_CONFIG, min_sentences=3)
    assert not verify_text(text, WEATHER_NATURE, config=cfg)


def test_trailing_text_is_not_a_sentence(two_sentence_text):
    # Two words would fail the sentence length rule if they were counted.
    text = two_sentence_text + b" Then silence"
    assert verify_text(text, WEATHER_NATURE)
    cfg = replace(DEFAULT_CONFIG, min_sentences=3)
    assert not verify_text(text, WEATHER_NATURE, config=cfg)
