"""Bucket merger: time, lunch and leave streams into one row per staff-date."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from payroll_tool.models import DailyRecord, LeaveBucket, SourceRow, ZERO
from payroll_tool.parsers.source_rows import classify_leave_type, parse_source_row
from payroll_tool.parsers.values import (
    format_mdy,
    month_token_for,
    round2,
    week_number_sunday,
    weekday_name,
    year_from_month_token,
)

logger = logging.getLogger(__name__)


def _new_record(row: SourceRow) -> DailyRecord:
    # The month token comes from the first row seen for the key.
    month = row.month_token or month_token_for(row.date)
    year = year_from_month_token(month) or row.date.year
    return DailyRecord(
        record_id=f"{row.staff}-{format_mdy(row.date)}",
        staff=row.staff,
        date=row.date,
        year=year,
        month=month,
        week=week_number_sunday(row.date),
        day=row.date.day,
        workday=weekday_name(row.date),
    )


def _rows(raw_rows: Iterable[Any]) -> Iterable[SourceRow]:
    for raw in raw_rows:
        row = parse_source_row(raw)
        if row is not None:
            yield row


def merge_by_staff_date(
    time_rows: list[Any],
    lunch_rows: list[Any],
    leave_rows: list[Any],
) -> list[DailyRecord]:
    """Merge the three streams into DailyRecords, in first-seen order.

    Repeated rows for the same (staff, date) accumulate. Hourly rate is the
    last positive rate seen across time, lunch, then leave rows. Sums are
    rounded to 2 decimals only after every row has been added, then clamped
    at zero.
    """
    buckets: dict[tuple[str, date], DailyRecord] = {}

    def bucket_for(row: SourceRow) -> DailyRecord:
        key = (row.staff, row.date)
        if key not in buckets:
            buckets[key] = _new_record(row)
        record = buckets[key]
        if row.hourly_rate > 0:
            record.hourly_rate = row.hourly_rate
        return record

    for row in _rows(time_rows):
        bucket_for(row).hours_in_office += row.hours

    for row in _rows(lunch_rows):
        bucket_for(row).hours_in_lunch += row.hours

    # Leave never touches office, lunch or net hours
    for row in _rows(leave_rows):
        record = bucket_for(row)
        bucket = classify_leave_type(row.leave_type)
        record.leave_hours[bucket] += row.hours

    for record in buckets.values():
        record.hours_in_office = round2(max(ZERO, record.hours_in_office))
        record.hours_in_lunch = round2(max(ZERO, record.hours_in_lunch))
        record.net_hours = round2(max(ZERO, record.hours_in_office - record.hours_in_lunch))
        for bucket in LeaveBucket:
            record.leave_hours[bucket] = round2(max(ZERO, record.leave_hours[bucket]))

    merged = list(buckets.values())
    logger.info("Merged %d staff-date rows", len(merged))
    return merged
