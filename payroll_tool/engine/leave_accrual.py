"""Leave bucket accrual: earn leave hours in proportion to hours worked.

earned = round2(total_hours / bonus_per_hours * bonus_hours), per staff.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from payroll_tool.ledger.protocols import Ledger, LedgerRow
from payroll_tool.models import PayloadValidationError, ZERO
from payroll_tool.parsers.values import format_mdy, round2, shorten, to_decimal

logger = logging.getLogger(__name__)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def sum_hours_by_staff(rows: list[Any]) -> dict[str, Decimal]:
    """Total hours per staff, in first-seen order. Rows without Staff are skipped."""
    totals: dict[str, Decimal] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        staff = str(_first_present(row, "Staff", "staff") or "").strip()
        if not staff:
            continue
        hours = to_decimal(_first_present(row, "Hours", "hours", "DurationInDecimals"))
        totals[staff] = totals.get(staff, ZERO) + hours
    return totals


def build_accrual_rows(
    totals: dict[str, Decimal],
    leave_type: str,
    bonus_per_hours: Decimal,
    bonus_hours: Decimal,
    today: date,
) -> list[LedgerRow]:
    rows: list[LedgerRow] = []
    for staff, total in totals.items():
        if total <= 0:
            continue
        earned = round2(total / bonus_per_hours * bonus_hours)
        if earned <= 0:
            continue
        rows.append({
            "Staff": staff,
            "Date": format_mdy(today),
            "Leave Type": leave_type,
            "Hours": float(earned),
        })
    return rows


def _parse_accrual_payload(payload: Any) -> tuple[list[Any], str, Decimal, Decimal]:
    errors: list[str] = []
    if not isinstance(payload, dict):
        raise PayloadValidationError(["Payload is missing or not an object"])

    rows = payload.get("timeSheetData")
    if rows is None:
        rows = []
    elif not isinstance(rows, list):
        errors.append(f"'timeSheetData' must be an array, got {type(rows).__name__}")

    leave_type = str(_first_present(payload, "leaveType", "LeaveType") or "").strip()
    per_raw = _first_present(payload, "bonusPerhours", "bonusPerHours", "BonusPerHours")
    hours_raw = _first_present(payload, "bonushours", "bonusHours", "BonusHours")
    bonus_per_hours = to_decimal(per_raw)
    bonus_hours = to_decimal(hours_raw)

    if not leave_type:
        errors.append("leaveType is required")
    if bonus_per_hours <= 0:
        errors.append(f'bonusPerHours must be > 0, got "{per_raw}"')
    if bonus_hours <= 0:
        errors.append(f'bonusHours must be > 0, got "{hours_raw}"')

    if errors:
        raise PayloadValidationError(errors)
    return rows, leave_type, bonus_per_hours, bonus_hours


def accrue_leave(payload: Any, ledger: Ledger, today: Optional[date] = None) -> dict[str, Any]:
    """Add earned leave rows to the leave bucket ledger. Never raises."""
    started = time.monotonic()
    today = today or date.today()

    try:
        logger.info("Received accrual payload %s", shorten(json.dumps(payload, default=str)))
        rows, leave_type, bonus_per_hours, bonus_hours = _parse_accrual_payload(payload)

        accrual_rows = build_accrual_rows(
            sum_hours_by_staff(rows), leave_type, bonus_per_hours, bonus_hours, today,
        )
        if not accrual_rows:
            logger.info("No rows to add to leave bucket (no positive earned hours)")
            return {
                "ok": True,
                "added": 0,
                "ms": int((time.monotonic() - started) * 1000),
                "detail": "No staff qualified for bonus hours",
            }

        logger.info("Prepared %d leave bucket rows %s", len(accrual_rows),
                    shorten(json.dumps(accrual_rows)))
        response = ledger.add(accrual_rows)

        summary = {
            "ok": True,
            "added": len(accrual_rows),
            "leaveType": leave_type,
            "bonusPerhours": float(bonus_per_hours),
            "bonushours": float(bonus_hours),
            "ms": int((time.monotonic() - started) * 1000),
            "appSheetStatus": response.get("Status") or "OK",
            "raw": response,
        }
        logger.info("Leave accrual completed %s", shorten(json.dumps(summary, default=str)))
        return summary

    except Exception as e:
        logger.exception("Leave accrual failed")
        return {"ok": False, "error": str(e)}
