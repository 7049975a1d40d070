"""Tolerant numeric parsing and the month/day/year date conventions.

Dates travel as "M/D/YYYY" text. Months are identified by a token such as
"2025-Aug" (also accepted: "Aug-2025", "2025-August"). Weeks are numbered
from the Sunday on or before January 1st, starting at 1.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_MDY = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_YEAR = re.compile(r"^\d{4}$")

MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTHS_FULL = ("January", "February", "March", "April", "May", "June", "July",
               "August", "September", "October", "November", "December")
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Parse a loosely formatted number ("$1,250.50", " 8 ", 7.5) into a Decimal.

    Anything unparseable or non-finite becomes 0. Numbers are converted
    directly, so exponent forms such as 1e-05 keep their value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
        return number if number.is_finite() else Decimal("0")
    text = _NON_NUMERIC.sub("", str(value).strip())
    match = _LEADING_NUMBER.match(text)
    if not match:
        return Decimal("0")
    try:
        number = Decimal(match.group(0))
    except InvalidOperation:
        return Decimal("0")
    return number if number.is_finite() else Decimal("0")


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, ROUND_HALF_UP)


def parse_mdy(text: str) -> Optional[date]:
    """Parse "M/D/YYYY" (zero padding optional). Returns None when invalid."""
    match = _MDY.match(str(text).strip())
    if not match:
        return None
    month, day, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_mdy(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def month_token_for(d: date) -> str:
    return f"{d.year}-{MONTHS_SHORT[d.month - 1]}"


def weekday_name(d: date) -> str:
    return WEEKDAYS[(d.weekday() + 1) % 7]


def _sunday_on_or_before(d: date) -> date:
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_number_sunday(d: date) -> int:
    """1-based week of the year, weeks running Sunday through Saturday."""
    year_start = _sunday_on_or_before(date(d.year, 1, 1))
    return (_sunday_on_or_before(d) - year_start).days // 7 + 1


def _month_index(name: str) -> Optional[int]:
    lowered = name.lower()
    if not lowered:
        return None
    for idx, short in enumerate(MONTHS_SHORT):
        if short.lower() == lowered:
            return idx + 1
    for idx, full in enumerate(MONTHS_FULL):
        if full.lower().startswith(lowered):
            return idx + 1
    return None


def parse_month_token(token: str) -> Optional[tuple[int, int]]:
    """Parse "YYYY-Mon" or "Mon-YYYY" into (year, month). None if unparseable."""
    parts = str(token or "").strip().split("-")
    if len(parts) != 2:
        return None
    first, second = parts
    if _YEAR.match(first):
        year, month = int(first), _month_index(second)
    elif _YEAR.match(second):
        year, month = int(second), _month_index(first)
    else:
        return None
    if month is None:
        return None
    return year, month


def year_from_month_token(token: str) -> Optional[int]:
    parsed = parse_month_token(token)
    return parsed[0] if parsed else None


def last_day_of_month_token(token: str) -> Optional[date]:
    parsed = parse_month_token(token)
    if parsed is None:
        return None
    year, month = parsed
    return date(year, month, calendar.monthrange(year, month)[1])


def chunked(items: list, size: int) -> list[list]:
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [items[i:i + size] for i in range(0, len(items), size)]


def shorten(text: str, limit: int = 750) -> str:
    return text if len(text) <= limit else text[:limit] + "..."
