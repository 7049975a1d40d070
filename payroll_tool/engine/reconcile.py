"""Insert-vs-update classification against the ledger."""

from __future__ import annotations

import logging

from payroll_tool.ledger.lookup import batched_find
from payroll_tool.ledger.protocols import Ledger, LedgerRow
from payroll_tool.ledger.selectors import Eq
from payroll_tool.models import DailyRecord, UpsertPlan

logger = logging.getLogger(__name__)

RECORD_ID = "Record ID"
_RECORD_ID_ALIASES = (RECORD_ID, "RecordID", "Record_Id", "RecordId")


def _record_id_of(row: LedgerRow) -> str:
    for key in _RECORD_ID_ALIASES:
        value = row.get(key)
        if value:
            return str(value).strip()
    return ""


def fetch_existing_record_ids(
    ledger: Ledger,
    record_ids: list[str],
    chunk_size: int = 15,
) -> set[str]:
    """Record IDs from the list that already exist in the ledger."""
    if not record_ids:
        return set()
    distinct = list(dict.fromkeys(record_ids))
    rows = batched_find(
        ledger,
        distinct,
        lambda rid: Eq(RECORD_ID, rid),
        columns=[RECORD_ID],
        chunk_size=chunk_size,
    )
    return {rid for rid in (_record_id_of(r) for r in rows) if rid}


def split_adds_edits(
    records: list[DailyRecord],
    ledger: Ledger,
    chunk_size: int = 15,
) -> UpsertPlan:
    """Partition records into adds (new Record ID) and edits (existing).

    Input order is kept within each list. Only an exact Record ID match
    makes a row an edit.
    """
    existing = fetch_existing_record_ids(ledger, [r.record_id for r in records], chunk_size)

    plan = UpsertPlan()
    for record in records:
        if record.record_id in existing:
            plan.edits.append(record)
        else:
            plan.adds.append(record)

    logger.info("Adds vs Edits: %d adds, %d edits", len(plan.adds), len(plan.edits))
    return plan
