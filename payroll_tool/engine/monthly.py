"""Per-staff, per-month totals rows."""

from __future__ import annotations

import logging

from payroll_tool.models import DailyRecord, LeaveBucket, MonthlyTotalRecord, ZERO
from payroll_tool.parsers.values import (
    format_mdy,
    last_day_of_month_token,
    round2,
    year_from_month_token,
)

logger = logging.getLogger(__name__)


def build_monthly_total(staff: str, month: str, records: list[DailyRecord]) -> MonthlyTotalRecord:
    """Sum one staff-month's daily records into a totals row.

    The row is dated on the last day of the month token, or on the first
    contributing row's date when the token does not parse. Hourly Rate is
    left at 0 because a rate sum means nothing.
    """
    rep_date = last_day_of_month_token(month) or records[0].date
    total = MonthlyTotalRecord(
        record_id=f"Total-{staff}-{month}",
        staff=staff,
        date=rep_date,
        year=year_from_month_token(month) or rep_date.year,
        month=month,
        week=0,
        day=0,
        workday="Total",
    )

    office = lunch = net = regular = overtime = amount = ZERO
    leave = {bucket: ZERO for bucket in LeaveBucket}
    for r in records:
        office += r.hours_in_office
        lunch += r.hours_in_lunch
        net += r.net_hours
        regular += r.regular
        overtime += r.overtime
        amount += r.amount
        for bucket in LeaveBucket:
            leave[bucket] += r.leave_hours[bucket]

    total.hours_in_office = round2(office)
    total.hours_in_lunch = round2(lunch)
    total.net_hours = round2(net)
    total.regular = round2(regular)
    total.overtime = round2(overtime)
    total.amount = round2(amount)
    total.leave_hours = {bucket: round2(hours) for bucket, hours in leave.items()}
    return total


def append_monthly_totals(records: list[DailyRecord]) -> list[DailyRecord]:
    """Return the daily records followed by one totals row per (staff, month)."""
    groups: dict[tuple[str, str], list[DailyRecord]] = {}
    for record in records:
        groups.setdefault((record.staff, record.month), []).append(record)

    out: list[DailyRecord] = list(records)
    for (staff, month), group in groups.items():
        out.append(build_monthly_total(staff, month, group))

    logger.info("Appended %d monthly totals rows", len(groups))
    return out
