"""Source row coercion.

Time, lunch and leave rows arrive as loosely-typed JSON objects typed in by
hand. Each is coerced into a SourceRow; rows without a usable Staff or Date
are dropped. Unknown fields are ignored.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from payroll_tool.models import LeaveBucket, SourceRow
from payroll_tool.parsers.values import parse_mdy, to_decimal

# First match wins. Anything unmatched falls back to Personal Leave.
_LEAVE_RULES: tuple[tuple[re.Pattern, LeaveBucket], ...] = (
    (re.compile(r"^sick"), LeaveBucket.SICK),
    (re.compile(r"^holiday"), LeaveBucket.HOLIDAY),
    (re.compile(r"^vacation"), LeaveBucket.VACATION),
    (re.compile(r"^funeral"), LeaveBucket.FUNERAL),
    (re.compile(r"^personal"), LeaveBucket.PERSONAL),
    (re.compile(r"^leave\s*without\s*pay"), LeaveBucket.LEAVE_WITHOUT_PAY),
    (re.compile(r"\blwp\b"), LeaveBucket.LEAVE_WITHOUT_PAY),
    (re.compile(r"\bunpaid\b"), LeaveBucket.LEAVE_WITHOUT_PAY),
)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def parse_source_row(raw: Any) -> Optional[SourceRow]:
    """Coerce one payload row. Returns None for rows that must be skipped."""
    if not isinstance(raw, dict):
        return None

    staff = _text(raw.get("Staff"))
    date_text = _text(raw.get("Date"))
    if not staff or not date_text:
        return None

    parsed_date = parse_mdy(date_text)
    if parsed_date is None:
        return None

    month_token = _text(raw.get("Month")) or _text(raw.get("PayrollMonth"))

    return SourceRow(
        staff=staff,
        date=parsed_date,
        hours=to_decimal(raw.get("Hours")),
        hourly_rate=to_decimal(_first_present(raw, "HourlyRate", "Hourly Rate")),
        month_token=month_token,
        leave_type=_text(_first_present(raw, "LeaveType", "Leave Type", "Type")),
    )


def classify_leave_type(leave_type: str) -> LeaveBucket:
    """Map free-text leave type to a bucket (case-insensitive)."""
    lowered = leave_type.strip().lower()
    for pattern, bucket in _LEAVE_RULES:
        if pattern.search(lowered):
            return bucket
    return LeaveBucket.PERSONAL
