import json

import pytest

from poi.ledger import LedgerJournal, read_journal


def test_records_are_sequenced_and_compact(tmp_path):
    path = tmp_path / "ledger.jsonl"
    with LedgerJournal(path) as journal:
        first = journal.record("initialize", {"epoch_number": 0})
        journal.record("claim", {"paid": 5})

    assert first == {"seq": 0, "event": "initialize", "epoch_number": 0}
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[1] == '{"seq":1,"event":"claim","paid":5}'


def test_sequence_continues_after_reopen(tmp_path):
    path = tmp_path / "ledger.jsonl"
    with LedgerJournal(path) as journal:
        journal.record("a", {})
        journal.record("b", {})
    with LedgerJournal(path) as journal:
        entry = journal.record("c", {})
    assert entry["seq"] == 2
    assert [e["event"] for e in read_journal(path)] == ["a", "b", "c"]


def test_write_after_close_raises(tmp_path):
    journal = LedgerJournal(tmp_path / "ledger.jsonl")
    journal.close()
    assert journal.closed
    with pytest.raises(ValueError):
        journal.record("late", {})


def test_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "ledger.jsonl"
    with LedgerJournal(path) as journal:
        journal.record("x", {})
    assert path.exists()


def test_read_journal_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_journal(tmp_path / "missing.jsonl")


def test_read_journal_skips_blank_and_rejects_non_objects(tmp_path):
    path = tmp_path / "ledger.jsonl"
    path.write_text(json.dumps({"seq": 0}) + "\n\n" + "[1, 2]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_journal(path)
