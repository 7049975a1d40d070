"""Daily pay amount calculation.

All money is computed with Decimal precision and rounded once, at the end.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_tool.models import DailyRecord, ZERO
from payroll_tool.parsers.values import round2

OVERTIME_MULTIPLIER = Decimal("1.5")


def compute_amount(record: DailyRecord, overtime_multiplier: Decimal = OVERTIME_MULTIPLIER) -> Decimal:
    """Rate x Regular + Rate x 1.5 x Overtime + Rate x paid leave.

    Leave Without Pay never contributes. A missing or non-positive rate
    yields 0.
    """
    rate = record.hourly_rate
    if rate <= 0:
        return round2(ZERO)

    regular_amt = rate * record.regular
    overtime_amt = rate * overtime_multiplier * record.overtime
    leave_amt = rate * record.paid_leave_hours
    return round2(regular_amt + overtime_amt + leave_amt)


def compute_daily_amounts(
    records: list[DailyRecord],
    overtime_multiplier: Decimal = OVERTIME_MULTIPLIER,
) -> list[DailyRecord]:
    """Set Amount on every record. Requires Regular/Overtime to be allocated."""
    for record in records:
        record.amount = compute_amount(record, overtime_multiplier)
    return records
