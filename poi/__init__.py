"""
Proof of Inference protocol core.

Deterministic, side-effect-free primitives for verifying natural-language
proof-of-work submissions and for running the epoch economics around them.
Importers should depend on this package's top level rather than on the
individual submodules.
"""

from poi.config import ConfigError, ProtocolConfig, get_config, load_config
from poi.core import (
    ClockReading,
    EmissionState,
    EpochParameters,
    RequiredWordSet,
    SubmissionRecord,
)
from poi.crypto.fingerprint import sentence_fingerprint
from poi.crypto.hashing import genesis_seed, solution_digest
from poi.economics.difficulty import adjust_difficulty, log2_ceil
from poi.economics.emission import apply_claim, capped_reward, reward_for
from poi.economics.rotation import EpochRotation, initial_epoch, next_seed, rotate_epoch
from poi.lexicon.derive import derive_required_words, word_count_for_difficulty
from poi.lexicon.wordlist import LEXICON
from poi.verify.pow import check_difficulty, leading_zero_bits
from poi.verify.submission import (
    Submission,
    evaluate_submission,
    mine_nonce,
    verify_batch,
    verify_submission,
)
from poi.verify.text import verify_text

__version__ = "0.1.0"

__all__ = [
    # Core types
    "ClockReading",
    "EmissionState",
    "EpochParameters",
    "RequiredWordSet",
    "SubmissionRecord",
    "Submission",
    "EpochRotation",
    # Config
    "ConfigError",
    "ProtocolConfig",
    "get_config",
    "load_config",
    # Challenge
    "LEXICON",
    "derive_required_words",
    "word_count_for_difficulty",
    # Verification
    "verify_text",
    "check_difficulty",
    "leading_zero_bits",
    "verify_submission",
    "evaluate_submission",
    "verify_batch",
    "mine_nonce",
    # Crypto
    "solution_digest",
    "genesis_seed",
    "sentence_fingerprint",
    # Economics
    "adjust_difficulty",
    "log2_ceil",
    "reward_for",
    "capped_reward",
    "apply_claim",
    "next_seed",
    "initial_epoch",
    "rotate_epoch",
]
