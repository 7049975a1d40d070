"""Protocol interface for the external payroll ledger.

Structural typing, no inheritance required: the engine accepts anything
with these three methods.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from payroll_tool.ledger.selectors import Selector

LedgerRow = dict[str, Any]


@runtime_checkable
class Ledger(Protocol):
    """Row-oriented system of record (Find / Add / Edit actions)."""

    def find(self, selector: Selector, columns: Optional[Sequence[str]] = None) -> list[LedgerRow]: ...

    def add(self, rows: list[LedgerRow]) -> dict[str, Any]: ...

    def edit(self, rows: list[LedgerRow]) -> dict[str, Any]: ...
