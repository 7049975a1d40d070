"""Tests for merging time, lunch and leave streams."""

import random

from decimal import Decimal
from datetime import date

from payroll_tool.engine.merger import merge_by_staff_date
from payroll_tool.models import LeaveBucket


def _row(staff="A", dt="8/4/2025", hours="0", **extra):
    row = {"Staff": staff, "Date": dt, "Hours": hours}
    row.update(extra)
    return row


def _by_id(records):
    return {r.record_id: r for r in records}


class TestMergeByStaffDate:
    def test_single_time_row(self):
        [rec] = merge_by_staff_date([_row(hours="8", HourlyRate="20")], [], [])
        assert rec.record_id == "A-8/4/2025"
        assert rec.staff == "A"
        assert rec.date == date(2025, 8, 4)
        assert rec.year == 2025
        assert rec.month == "2025-Aug"
        assert rec.week == 32
        assert rec.day == 4
        assert rec.workday == "Monday"
        assert rec.hours_in_office == Decimal("8.00")
        assert rec.net_hours == Decimal("8.00")
        assert rec.hourly_rate == Decimal("20")

    def test_repeated_rows_accumulate(self):
        [rec] = merge_by_staff_date(
            [_row(hours="3.333"), _row(hours="3.333"), _row(hours="3.333")], [], [],
        )
        # rounded once, after summing
        assert rec.hours_in_office == Decimal("10.00")

    def test_padded_and_unpadded_dates_share_a_bucket(self):
        [rec] = merge_by_staff_date([_row(dt="08/04/2025", hours="2"), _row(dt="8/4/2025", hours="3")], [], [])
        assert rec.hours_in_office == Decimal("5.00")
        assert rec.record_id == "A-8/4/2025"

    def test_lunch_is_deducted(self):
        [rec] = merge_by_staff_date([_row(hours="9")], [_row(hours="0.5")], [])
        assert rec.hours_in_lunch == Decimal("0.50")
        assert rec.net_hours == Decimal("8.50")

    def test_net_hours_never_negative(self):
        [rec] = merge_by_staff_date([_row(hours="1")], [_row(hours="2")], [])
        assert rec.net_hours == Decimal("0.00")

    def test_lunch_only_row_creates_record(self):
        [rec] = merge_by_staff_date([], [_row(hours="1")], [])
        assert rec.hours_in_office == Decimal("0.00")
        assert rec.net_hours == Decimal("0.00")

    def test_leave_does_not_touch_net_hours(self):
        [rec] = merge_by_staff_date(
            [_row(hours="4")], [], [_row(hours="4", LeaveType="Sick")],
        )
        assert rec.net_hours == Decimal("4.00")
        assert rec.leave_hours[LeaveBucket.SICK] == Decimal("4.00")

    def test_lwp_bucket(self):
        [rec] = merge_by_staff_date([], [], [_row(staff="B", hours="8", LeaveType="LWP")])
        assert rec.leave_hours[LeaveBucket.LEAVE_WITHOUT_PAY] == Decimal("8.00")
        assert rec.net_hours == Decimal("0.00")

    def test_unknown_leave_type_goes_to_personal(self):
        [rec] = merge_by_staff_date([], [], [_row(hours="8", LeaveType="bereavement")])
        assert rec.leave_hours[LeaveBucket.PERSONAL] == Decimal("8.00")

    def test_leave_buckets_accumulate_independently(self):
        [rec] = merge_by_staff_date([], [], [
            _row(hours="2", LeaveType="Sick"),
            _row(hours="3", LeaveType="sick leave"),
            _row(hours="1", LeaveType="Vacation"),
        ])
        assert rec.leave_hours[LeaveBucket.SICK] == Decimal("5.00")
        assert rec.leave_hours[LeaveBucket.VACATION] == Decimal("1.00")
        assert rec.leave_hours[LeaveBucket.HOLIDAY] == Decimal("0.00")

    def test_rate_last_positive_wins_across_streams(self):
        [rec] = merge_by_staff_date(
            [_row(hours="4", HourlyRate="20"), _row(hours="4", HourlyRate="0")],
            [_row(hours="1", HourlyRate="22")],
            [_row(hours="2", LeaveType="Sick", HourlyRate="25")],
        )
        assert rec.hourly_rate == Decimal("25")

    def test_zero_rate_does_not_overwrite(self):
        [rec] = merge_by_staff_date(
            [_row(hours="4", HourlyRate="20")], [_row(hours="1", HourlyRate="")], [],
        )
        assert rec.hourly_rate == Decimal("20")

    def test_malformed_rows_skipped(self):
        records = merge_by_staff_date(
            [_row(hours="4"), {"Date": "8/4/2025", "Hours": 4}, {"Staff": "A", "Hours": 4}, "junk"],
            [],
            [],
        )
        assert len(records) == 1
        assert records[0].hours_in_office == Decimal("4.00")

    def test_separate_keys(self):
        records = merge_by_staff_date(
            [_row(staff="A", hours="1"), _row(staff="B", hours="2"), _row(staff="A", dt="8/5/2025", hours="3")],
            [],
            [],
        )
        assert set(_by_id(records)) == {"A-8/4/2025", "B-8/4/2025", "A-8/5/2025"}

    def test_payload_month_token_wins(self):
        [rec] = merge_by_staff_date([_row(dt="8/31/2025", hours="1", Month="2025-Sep")], [], [])
        assert rec.month == "2025-Sep"
        assert rec.year == 2025

    def test_year_from_month_token(self):
        # A Dec 31 shift booked into the next year's January payroll
        [rec] = merge_by_staff_date([_row(dt="12/31/2024", hours="1", Month="2025-Jan")], [], [])
        assert rec.year == 2025

    def test_unparseable_month_token_falls_back_to_date_year(self):
        [rec] = merge_by_staff_date([_row(dt="8/4/2025", hours="1", Month="Summer")], [], [])
        assert rec.month == "Summer"
        assert rec.year == 2025

    def test_order_within_stream_does_not_change_sums(self):
        rows = [_row(hours=h) for h in ("1.11", "2.22", "3.335", "0.005", "7")]
        lunch = [_row(hours=h) for h in ("0.25", "0.5")]
        expected = merge_by_staff_date(rows, lunch, [])[0]
        shuffled_rows = rows[:]
        shuffled_lunch = lunch[:]
        rng = random.Random(7)
        for _ in range(5):
            rng.shuffle(shuffled_rows)
            rng.shuffle(shuffled_lunch)
            [rec] = merge_by_staff_date(shuffled_rows, shuffled_lunch, [])
            assert rec.hours_in_office == expected.hours_in_office
            assert rec.net_hours == expected.net_hours

    def test_empty_input(self):
        assert merge_by_staff_date([], [], []) == []
