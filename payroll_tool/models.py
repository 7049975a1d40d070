"""Canonical data model for the payroll aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from payroll_tool.parsers.values import format_mdy


ZERO = Decimal("0")


class LeaveBucket(Enum):
    """Leave buckets; values are the ledger column names."""
    SICK = "Sick Hrs"
    HOLIDAY = "Holiday Hrs"
    VACATION = "Vacation Hrs"
    FUNERAL = "Funeral Leave"
    PERSONAL = "Personal Leave"
    LEAVE_WITHOUT_PAY = "Leave Without Pay"

    @property
    def is_paid(self) -> bool:
        return self is not LeaveBucket.LEAVE_WITHOUT_PAY


# Column order of the external "Payroll" table. Names are fixed by the ledger.
LEDGER_COLUMNS: tuple[str, ...] = (
    "Record ID",
    "Staff",
    "Date",
    "Year",
    "Month",
    "Week",
    "Day",
    "Workday",
    "Hours in Office",
    "Hours in Lunch",
    "Net Hours",
    "Regular",
    "Overtime",
    "Sick Hrs",
    "Holiday Hrs",
    "Vacation Hrs",
    "Funeral Leave",
    "Personal Leave",
    "Leave Without Pay",
    "Hourly Rate",
    "Amount",
)


def _empty_leave() -> dict[LeaveBucket, Decimal]:
    return {bucket: ZERO for bucket in LeaveBucket}


@dataclass(frozen=True)
class SourceRow:
    """One row from the time, lunch or leave stream after coercion."""
    staff: str
    date: date
    hours: Decimal
    hourly_rate: Decimal
    month_token: str = ""
    leave_type: str = ""


@dataclass
class DailyRecord:
    """Merged payroll row for one (staff, calendar date)."""
    record_id: str
    staff: str
    date: date
    year: int
    month: str
    week: int
    day: int
    workday: str
    hours_in_office: Decimal = ZERO
    hours_in_lunch: Decimal = ZERO
    net_hours: Decimal = ZERO
    regular: Decimal = ZERO
    overtime: Decimal = ZERO
    leave_hours: dict[LeaveBucket, Decimal] = field(default_factory=_empty_leave)
    hourly_rate: Decimal = ZERO
    amount: Decimal = ZERO

    @property
    def staff_week(self) -> tuple[str, int, int]:
        return (self.staff, self.year, self.week)

    @property
    def paid_leave_hours(self) -> Decimal:
        return sum(
            (hours for bucket, hours in self.leave_hours.items() if bucket.is_paid),
            ZERO,
        )

    def to_ledger_row(self) -> dict[str, Any]:
        """Render the record with the ledger's column names and JSON-safe values."""
        row: dict[str, Any] = {
            "Record ID": self.record_id,
            "Staff": self.staff,
            "Date": format_mdy(self.date),
            "Year": self.year,
            "Month": self.month,
            "Week": self.week,
            "Day": self.day,
            "Workday": self.workday,
            "Hours in Office": float(self.hours_in_office),
            "Hours in Lunch": float(self.hours_in_lunch),
            "Net Hours": float(self.net_hours),
            "Regular": float(self.regular),
            "Overtime": float(self.overtime),
        }
        for bucket in LeaveBucket:
            row[bucket.value] = float(self.leave_hours[bucket])
        row["Hourly Rate"] = float(self.hourly_rate)
        row["Amount"] = float(self.amount)
        return row


@dataclass
class MonthlyTotalRecord(DailyRecord):
    """Per-staff, per-month roll-up. Week and Day are always 0."""


@dataclass
class UpsertPlan:
    """Rows split by whether their Record ID already exists in the ledger."""
    adds: list[DailyRecord] = field(default_factory=list)
    edits: list[DailyRecord] = field(default_factory=list)


class PayrollError(Exception):
    """Base class for engine errors."""


class PayloadValidationError(PayrollError):
    """Raised when the input payload is unusable."""
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Payload validation failed with {len(errors)} error(s):\n" +
                         "\n".join(f"  - {e}" for e in errors))


class LedgerError(PayrollError):
    """Raised when the external ledger cannot be reached."""
    def __init__(self, message: str, action: str = "", table: Optional[str] = None):
        self.action = action
        self.table = table
        super().__init__(message)


class LedgerConfigError(LedgerError):
    """Raised when ledger credentials are missing."""
