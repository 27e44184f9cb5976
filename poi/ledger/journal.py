from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO, Union


class LedgerJournal:
    """Append-only JSONL journal of ledger events.

    **Invariants:**
      * **Record ordering:** each call to ``record(event, payload)`` appends
        exactly one JSON object line, in call order.
      * **Shape:** every line is ``{"seq": n, "event": name, **payload}`` with
        ``seq`` counting from 0 for a fresh file, continuing after the last
        existing line when reopening.
      * **Separators:** compact ``separators=(",", ":")``, ASCII only.
      * **Flush:** every successful ``record`` flushes before returning.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        if self._path.parent and not self._path.parent.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self._seq = len(read_journal(self._path)) if self._path.exists() else 0
        self._file: Optional[TextIO] = self._path.open("a", encoding="utf-8")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def record(self, event: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        if self._closed or self._file is None:
            raise ValueError("Cannot write to a closed LedgerJournal.")
        entry: Dict[str, Any] = {"seq": self._seq, "event": event}
        entry.update(payload)
        line = json.dumps(entry, separators=(",", ":"), ensure_ascii=True)
        self._file.write(f"{line}\n")
        self._file.flush()
        self._seq += 1
        return entry

    def close(self) -> None:
        if not self._closed and self._file is not None:
            self._file.close()
            self._file = None
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "LedgerJournal":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def read_journal(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load journal entries from a JSONL file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Journal file not found: {path}")

    entries: List[Dict[str, Any]] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        entry = json.loads(stripped)
        if not isinstance(entry, dict):
            raise ValueError(f"Malformed journal line in {path}: {stripped[:80]}")
        entries.append(entry)
    return entries
