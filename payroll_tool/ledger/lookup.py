"""Batched key lookup against a ledger."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, TypeVar

from payroll_tool.ledger.protocols import Ledger, LedgerRow
from payroll_tool.ledger.selectors import Selector, any_of
from payroll_tool.parsers.values import chunked

K = TypeVar("K")


def batched_find(
    ledger: Ledger,
    keys: Iterable[K],
    predicate: Callable[[K], Selector],
    columns: Optional[Sequence[str]] = None,
    chunk_size: int = 15,
) -> list[LedgerRow]:
    """Find rows matching any key, issuing one query per chunk of keys.

    Chunking bounds the selector length. Results from every chunk are
    concatenated in query order.
    """
    rows: list[LedgerRow] = []
    for chunk in chunked(list(keys), chunk_size):
        selector = any_of([predicate(key) for key in chunk])
        rows.extend(ledger.find(selector, columns))
    return rows
