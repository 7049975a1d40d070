"""Weekly overtime allocation.

Regular hours are capped per staff-week (Sunday through Saturday). Days are
allocated in date order, and the cap is seeded with net hours the ledger
already holds for that staff-week from earlier submissions.

Leave hours never count toward the cap; only net worked hours do.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Optional

from payroll_tool.ledger.lookup import batched_find
from payroll_tool.ledger.protocols import Ledger
from payroll_tool.ledger.selectors import And, Eq
from payroll_tool.models import DailyRecord, ZERO
from payroll_tool.parsers.values import round2, shorten, to_decimal

logger = logging.getLogger(__name__)

StaffWeek = tuple[str, int, int]

WEEKLY_REGULAR_CAP = Decimal("40")
CARRY_IN_COLUMNS = ("Record ID", "Staff", "Year", "Week", "Net Hours")


def collect_staff_weeks(records: list[DailyRecord]) -> list[StaffWeek]:
    """Distinct (staff, year, week) keys in first-seen order."""
    return list(dict.fromkeys(r.staff_week for r in records))


def _staff_week_selector(key: StaffWeek) -> And:
    staff, year, week = key
    return And(Eq("Staff", staff), Eq("Year", year), Eq("Week", week))


def _row_int(value: object) -> int:
    return int(to_decimal(value))


def fetch_week_carry_in(
    ledger: Ledger,
    records: list[DailyRecord],
    chunk_size: int = 15,
) -> dict[StaffWeek, Decimal]:
    """Sum net hours already in the ledger per staff-week.

    Ledger rows whose Record ID is part of this run are left out: they are
    about to be overwritten by the rows being computed now, so counting them
    would book the same hours twice on a re-submission.
    """
    keys = collect_staff_weeks(records)
    if not keys:
        logger.info("Existing week totals skipped (no keys)")
        return {}

    resubmitted = {r.record_id for r in records}
    rows = batched_find(ledger, keys, _staff_week_selector, CARRY_IN_COLUMNS, chunk_size)

    wanted = set(keys)
    totals: dict[StaffWeek, Decimal] = defaultdict(lambda: ZERO)
    for row in rows:
        if str(row.get("Record ID") or "").strip() in resubmitted:
            continue
        key = (
            str(row.get("Staff") or "").strip(),
            _row_int(row.get("Year")),
            _row_int(row.get("Week")),
        )
        if key not in wanted:
            continue
        totals[key] += to_decimal(row.get("Net Hours"))

    carry_in = {key: round2(total) for key, total in totals.items()}
    logger.info("Existing week totals fetched: %s", shorten(repr(
        {"|".join(map(str, k)): str(v) for k, v in carry_in.items()}
    )))
    return carry_in


def allocate_regular_overtime(
    records: list[DailyRecord],
    carry_in: Optional[dict[StaffWeek, Decimal]] = None,
    weekly_cap: Decimal = WEEKLY_REGULAR_CAP,
) -> list[DailyRecord]:
    """Assign Regular/Overtime on each record in place and return the records.

    Within a staff-week: regular = min(net, max(0, cap - running)),
    overtime = net - regular, then running += net.
    """
    carry_in = carry_in or {}

    groups: dict[StaffWeek, list[DailyRecord]] = defaultdict(list)
    for record in records:
        groups[record.staff_week].append(record)

    for key, week_records in groups.items():
        running = carry_in.get(key, ZERO)
        for record in sorted(week_records, key=lambda r: r.date):
            net = max(ZERO, record.net_hours)
            regular = min(net, max(ZERO, weekly_cap - running))
            record.regular = round2(regular)
            record.overtime = round2(net - regular)
            running += net

    return records
