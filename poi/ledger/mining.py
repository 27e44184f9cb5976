"""
Reference mining ledger.

In-memory stand-in for the surrounding ledger: it owns the epoch
parameters, the emission counters and the per-miner solution records, and
drives the pure verification and economics functions.

Lifecycle
---------
1. ``initialize``       -> epoch 0 with a genesis seed
2. ``submit_solution``  -> one record per (miner, epoch); no shared counter is written
3. ``advance_epoch``    -> after the epoch ends, with an externally counted
                           number of solutions
4. ``claim``            -> after the solution's epoch ends and before it expires

Not thread-safe: the caller serialises calls (single writer).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

from poi.config import ProtocolConfig, get_config
from poi.core import ClockReading, EmissionState, EpochParameters, SubmissionRecord
from poi.crypto.hashing import genesis_seed, solution_digest
from poi.economics.emission import apply_claim
from poi.economics.rotation import EpochRotation, initial_epoch, rotate_epoch
from poi.errors import (
    ClaimExpiredError,
    DuplicateSolutionError,
    EpochEndedError,
    EpochNotEndedError,
    InsufficientDifficultyError,
    InvalidNonceError,
    InvalidTextError,
    LedgerNotInitializedError,
    MaxSupplyReachedError,
    UnknownSolutionError,
)
from poi.ledger.journal import LedgerJournal
from poi.lexicon.derive import derive_required_words
from poi.verify.pow import check_difficulty
from poi.verify.text import verify_text

__all__ = ["DEFAULT_STATE_KEY", "MiningLedger"]

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = b"mine_state"

SolutionKey = Tuple[bytes, int]

_U64_LIMIT = 1 << 64


class MiningLedger:
    """
    Mining state machine over the pure protocol functions.

    Attributes:
        config: Protocol config in force
        last_solution_count: Solution count reported at the last rotation
    """

    def __init__(
        self,
        config: Optional[ProtocolConfig] = None,
        journal: Optional[LedgerJournal] = None,
    ) -> None:
        self.config = config or get_config()
        self.journal = journal
        self.last_solution_count = 0
        self._params: Optional[EpochParameters] = None
        self._emission = EmissionState()
        self._solutions: Dict[SolutionKey, SubmissionRecord] = {}

    # ------------------------------------------------------------------ state

    @property
    def initialized(self) -> bool:
        return self._params is not None

    @property
    def params(self) -> EpochParameters:
        if self._params is None:
            raise LedgerNotInitializedError("call initialize() first")
        return self._params

    @property
    def emission(self) -> EmissionState:
        return self._emission

    def solution(self, miner: bytes, epoch: int) -> Optional[SubmissionRecord]:
        return self._solutions.get((miner, epoch))

    def pending_solutions(self, epoch: Optional[int] = None) -> List[SubmissionRecord]:
        """
        Unclaimed, unexpired records, optionally for one epoch, in submission order.

        Records past ``claim_expiry_epochs`` are skipped. They stay in the
        store until reclaimed, which this ledger does not do.
        """
        current = self._params.epoch_number if self._params is not None else 0
        expiry = self.config.claim_expiry_epochs
        return [
            record
            for record in self._solutions.values()
            if (epoch is None or record.epoch == epoch) and current < record.epoch + expiry
        ]

    def _journal(self, event: str, payload: Dict[str, object]) -> None:
        if self.journal is not None:
            self.journal.record(event, payload)

    # ------------------------------------------------------------ operations

    def initialize(
        self,
        clock: ClockReading,
        state_key: bytes = DEFAULT_STATE_KEY,
    ) -> EpochParameters:
        """Create epoch 0 with a seed derived from the clock and ``state_key``."""
        seed = genesis_seed(clock.slot, clock.unix_timestamp, state_key, config=self.config)
        self._params = initial_epoch(seed, clock, config=self.config)
        self._emission = EmissionState()
        self._solutions.clear()
        self.last_solution_count = 0
        logger.info(
            "initialized mining state: difficulty=%d epoch_end=%d",
            self._params.difficulty,
            self._params.epoch_end,
        )
        self._journal("initialize", self._params.to_dict())
        return self._params

    def submit_solution(
        self,
        miner: bytes,
        text: Union[bytes, str],
        nonce: int,
        clock: ClockReading,
    ) -> SubmissionRecord:
        """
        Verify and store a solution for the active epoch.

        Raises:
            EpochEndedError: The active epoch is over
            MaxSupplyReachedError: Emission is already at the cap
            DuplicateSolutionError: This miner already submitted this epoch
            InvalidTextError: Text constraints not met
            InvalidNonceError: Nonce outside [0, 2**64)
            InsufficientDifficultyError: Digest does not meet the difficulty
        """
        params = self.params
        if not params.is_active(clock.unix_timestamp):
            raise EpochEndedError(f"epoch {params.epoch_number} ended at {params.epoch_end}")
        if self._emission.total_supply >= self.config.max_supply:
            raise MaxSupplyReachedError("maximum token supply reached")

        key = (miner, params.epoch_number)
        if key in self._solutions:
            raise DuplicateSolutionError(
                f"miner {miner.hex()} already submitted in epoch {params.epoch_number}"
            )

        body = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        required = derive_required_words(params.challenge_seed, params.difficulty)
        if not verify_text(body, required, config=self.config):
            raise InvalidTextError("text verification failed")

        if not 0 <= nonce < _U64_LIMIT:
            raise InvalidNonceError(f"nonce {nonce} does not fit in 64 bits")

        digest = solution_digest(params.challenge_seed, miner, body, nonce, config=self.config)
        if not check_difficulty(digest, params.difficulty):
            raise InsufficientDifficultyError("hash does not meet difficulty requirement")

        record = SubmissionRecord(
            miner=miner,
            epoch=params.epoch_number,
            nonce=nonce,
            digest=digest,
        )
        self._solutions[key] = record
        self._journal("submit", record.to_dict())
        return record

    def claim(self, miner: bytes, epoch: int, clock: ClockReading) -> int:
        """
        Pay out a stored solution and consume its record.

        Returns:
            Amount minted (0 once the supply cap is reached)

        Raises:
            UnknownSolutionError: No record for (miner, epoch)
            EpochNotEndedError: The solution's epoch is still running
            ClaimExpiredError: ``claim_expiry_epochs`` have passed
        """
        params = self.params
        record = self._solutions.get((miner, epoch))
        if record is None:
            raise UnknownSolutionError(f"no solution for miner {miner.hex()} in epoch {epoch}")

        current = params.epoch_number
        if record.epoch < current:
            epoch_over = True
        elif record.epoch == current:
            epoch_over = clock.unix_timestamp >= params.epoch_end
        else:
            epoch_over = False
        if not epoch_over:
            raise EpochNotEndedError(f"epoch {record.epoch} has not ended")

        if current >= record.epoch + self.config.claim_expiry_epochs:
            raise ClaimExpiredError(
                f"solution from epoch {record.epoch} expired at epoch "
                f"{record.epoch + self.config.claim_expiry_epochs}"
            )

        self._emission, paid = apply_claim(self._emission, config=self.config)
        del self._solutions[(miner, epoch)]

        logger.info(
            "claim miner=%s epoch=%d paid=%d total_supply=%d",
            miner.hex(),
            epoch,
            paid,
            self._emission.total_supply,
        )
        self._journal(
            "claim",
            {
                "miner": miner.hex(),
                "epoch": epoch,
                "paid": paid,
                "total_accepted_solutions": self._emission.total_accepted_solutions,
                "total_supply": self._emission.total_supply,
            },
        )
        return paid

    def advance_epoch(self, solution_count: int, clock: ClockReading) -> EpochRotation:
        """Rotate to the next epoch once the current one has ended."""
        rotation = rotate_epoch(
            self.params,
            solution_count,
            clock,
            emission=self._emission,
            config=self.config,
        )
        self._params = rotation.current
        self.last_solution_count = solution_count
        self._journal("advance_epoch", rotation.to_dict())
        return rotation
