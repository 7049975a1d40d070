"""In-memory ledger for unit tests and offline runs."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from payroll_tool.ledger.protocols import LedgerRow
from payroll_tool.ledger.selectors import Selector


class MemoryLedger:
    """List-backed Ledger. Edit replaces rows sharing the key column."""

    def __init__(self, rows: Optional[list[LedgerRow]] = None, key: str = "Record ID") -> None:
        self._key = key
        self._rows: list[LedgerRow] = [dict(r) for r in rows or []]
        self.calls: list[tuple[str, Any]] = []

    @property
    def rows(self) -> list[LedgerRow]:
        return [dict(r) for r in self._rows]

    def find(self, selector: Selector, columns: Optional[Sequence[str]] = None) -> list[LedgerRow]:
        self.calls.append(("Find", selector.render()))
        matched = [r for r in self._rows if selector.matches(r)]
        if columns:
            return [{c: r.get(c) for c in columns} for r in matched]
        return [dict(r) for r in matched]

    def add(self, rows: list[LedgerRow]) -> dict[str, Any]:
        self.calls.append(("Add", len(rows)))
        self._rows.extend(dict(r) for r in rows)
        return {"Status": "OK", "Rows": rows}

    def edit(self, rows: list[LedgerRow]) -> dict[str, Any]:
        self.calls.append(("Edit", len(rows)))
        for row in rows:
            for idx, existing in enumerate(self._rows):
                if existing.get(self._key) == row.get(self._key):
                    self._rows[idx] = dict(row)
                    break
            else:
                self._rows.append(dict(row))
        return {"Status": "OK", "Rows": rows}
