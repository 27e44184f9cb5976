"""
Ledger-facing error categories.

The verifiers themselves only ever answer accept/reject. These exceptions
are raised by the epoch and ledger layers, which are allowed to tell a
caller *why* an operation was refused (timing, supply, duplicate
submission) but never which text rule failed.
"""

from __future__ import annotations

__all__ = [
    "LedgerError",
    "InvalidTextError",
    "InsufficientDifficultyError",
    "InvalidNonceError",
    "MaxSupplyReachedError",
    "EpochEndedError",
    "EpochNotEndedError",
    "ClaimExpiredError",
    "DuplicateSolutionError",
    "UnknownSolutionError",
    "LedgerNotInitializedError",
]


class LedgerError(RuntimeError):
    """Base class for refused ledger operations."""

    code = "LEDGER_ERROR"


class InvalidTextError(LedgerError):
    """Text verification failed."""

    code = "INVALID_TEXT"


class InsufficientDifficultyError(LedgerError):
    """Hash does not meet difficulty requirement."""

    code = "INSUFFICIENT_DIFFICULTY"


class InvalidNonceError(LedgerError):
    """Nonce does not fit in 64 unsigned bits."""

    code = "INVALID_NONCE"


class MaxSupplyReachedError(LedgerError):
    """Maximum token supply reached."""

    code = "MAX_SUPPLY_REACHED"


class EpochEndedError(LedgerError):
    """Current epoch has ended; the epoch must be advanced first."""

    code = "EPOCH_ENDED"


class EpochNotEndedError(LedgerError):
    """Epoch has not ended yet."""

    code = "EPOCH_NOT_ENDED"


class ClaimExpiredError(LedgerError):
    """Solution claim period has expired."""

    code = "CLAIM_EXPIRED"


class DuplicateSolutionError(LedgerError):
    """Miner already submitted a solution in this epoch."""

    code = "DUPLICATE_SOLUTION"


class UnknownSolutionError(LedgerError):
    """No stored solution for this miner and epoch."""

    code = "UNKNOWN_SOLUTION"


class LedgerNotInitializedError(LedgerError):
    """Mining state has not been initialized."""

    code = "NOT_INITIALIZED"
