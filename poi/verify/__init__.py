"""Text, proof-of-work and submission verification."""

from poi.verify.pow import check_difficulty, leading_zero_bits
from poi.verify.submission import (
    Submission,
    evaluate_submission,
    mine_nonce,
    verify_batch,
    verify_submission,
)
from poi.verify.text import verify_text

__all__ = [
    "Submission",
    "check_difficulty",
    "evaluate_submission",
    "leading_zero_bits",
    "mine_nonce",
    "verify_batch",
    "verify_submission",
    "verify_text",
]
