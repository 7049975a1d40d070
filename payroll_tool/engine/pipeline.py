"""Payroll run: raw payload in, ledger upserts out.

    payload -> merge -> carry-in lookup -> overtime -> amounts
            -> monthly totals -> existing-key lookup -> Add / Edit

run_payroll() is the boundary: it never raises and always returns a
JSON-friendly result.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Optional

from payroll_tool.config import EngineConfig
from payroll_tool.engine.calculator import compute_daily_amounts
from payroll_tool.engine.merger import merge_by_staff_date
from payroll_tool.engine.monthly import append_monthly_totals
from payroll_tool.engine.overtime import allocate_regular_overtime, fetch_week_carry_in
from payroll_tool.engine.reconcile import split_adds_edits
from payroll_tool.engine.validator import PayrollPayload, validate_payload
from payroll_tool.ledger.protocols import Ledger
from payroll_tool.models import DailyRecord, UpsertPlan
from payroll_tool.parsers.values import shorten

logger = logging.getLogger(__name__)


def build_payroll_rows(
    payload: PayrollPayload,
    ledger: Ledger,
    config: EngineConfig,
) -> list[DailyRecord]:
    """Daily rows with Regular/Overtime/Amount, followed by monthly totals."""
    merged = merge_by_staff_date(payload.time_rows, payload.lunch_rows, payload.leave_rows)

    if config.use_existing_week_totals:
        carry_in = fetch_week_carry_in(ledger, merged, config.lookup_chunk_size)
    else:
        logger.info("Skipping existing week totals (flag off)")
        carry_in = {}

    allocate_regular_overtime(merged, carry_in, config.weekly_regular_cap)
    compute_daily_amounts(merged, config.overtime_multiplier)
    return append_monthly_totals(merged)


def write_plan(plan: UpsertPlan, ledger: Ledger, dry_run: bool = False) -> list[dict[str, Any]]:
    """Send the Add and Edit batches and collect each backend status."""
    results: list[dict[str, Any]] = []
    batches = (("Add", plan.adds, ledger.add), ("Edit", plan.edits, ledger.edit))

    for action, records, send in batches:
        if not records:
            logger.info("No rows to %s", action)
            continue
        rows = [r.to_ledger_row() for r in records]
        if dry_run:
            results.append({"type": action, "count": len(rows), "status": "SKIPPED", "rows": rows})
            continue
        response = send(rows)
        results.append({
            "type": action,
            "count": len(rows),
            "status": response.get("Status") or "OK",
            "raw": response,
        })
        logger.info("Bulk %s %d :: %s", action, len(rows), shorten(json.dumps(response, default=str)),
                    extra={"action": action})

    return results


def run_payroll(
    payload: Any,
    ledger: Ledger,
    config: Optional[EngineConfig] = None,
    include_rows: bool = False,
) -> dict[str, Any]:
    """Run the whole payroll upsert for one payload.

    Returns {"ok": True, "adds", "edits", "ms", "results"} on success, or
    {"ok": False, "error"} on any failure. With include_rows the computed
    ledger rows are returned under "rows" as well.
    """
    config = config or EngineConfig()
    run_id = uuid.uuid4().hex[:12]
    started = time.monotonic()

    try:
        logger.info("Received payload %s", shorten(json.dumps(payload, default=str)),
                    extra={"run_id": run_id})

        streams = validate_payload(payload)
        rows = build_payroll_rows(streams, ledger, config)
        plan = split_adds_edits(rows, ledger, config.lookup_chunk_size)
        results = write_plan(plan, ledger, dry_run=config.dry_run)

        ms = int((time.monotonic() - started) * 1000)
        summary = {"adds": len(plan.adds), "edits": len(plan.edits), "ms": ms}
        logger.info("Completed upsert %s", summary, extra={"run_id": run_id, "duration_ms": ms})

        result: dict[str, Any] = {"ok": True, **summary, "results": results}
        if include_rows:
            result["rows"] = [r.to_ledger_row() for r in rows]
        return result

    except Exception as e:
        logger.exception("Payroll run failed", extra={"run_id": run_id})
        return {"ok": False, "error": str(e)}
