"""Reference ledger around the protocol core."""

from poi.ledger.journal import LedgerJournal, read_journal
from poi.ledger.mining import DEFAULT_STATE_KEY, MiningLedger

__all__ = ["DEFAULT_STATE_KEY", "LedgerJournal", "MiningLedger", "read_journal"]
