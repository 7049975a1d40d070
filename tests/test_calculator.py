"""Tests for daily amount calculation."""

import pytest
from decimal import Decimal
from datetime import date

from payroll_tool.engine.calculator import compute_amount, compute_daily_amounts
from payroll_tool.models import DailyRecord, LeaveBucket


def _make_record(
    regular: str = "0",
    overtime: str = "0",
    rate: str = "20",
    **leave: str,
) -> DailyRecord:
    record = DailyRecord(
        record_id="A-8/6/2025",
        staff="A",
        date=date(2025, 8, 6),
        year=2025,
        month="2025-Aug",
        week=32,
        day=6,
        workday="Wednesday",
        regular=Decimal(regular),
        overtime=Decimal(overtime),
        hourly_rate=Decimal(rate),
    )
    for name, hours in leave.items():
        record.leave_hours[LeaveBucket[name.upper()]] = Decimal(hours)
    return record


class TestComputeAmount:
    def test_regular_and_overtime(self):
        # 20 x 34 + 30 x 6
        assert compute_amount(_make_record("34", "6")) == Decimal("860.00")

    def test_paid_leave_at_straight_rate(self):
        record = _make_record(sick="2", holiday="8", vacation="1", funeral="1", personal="0.5")
        assert compute_amount(record) == Decimal("250.00")

    def test_leave_without_pay_excluded(self):
        record = _make_record(leave_without_pay="8", rate="35")
        assert compute_amount(record) == Decimal("0.00")

    def test_mixed(self):
        record = _make_record("8", "2", rate="18.75", sick="4", leave_without_pay="4")
        # 18.75*8 + 28.125*2 + 18.75*4 = 150 + 56.25 + 75
        assert compute_amount(record) == Decimal("281.25")

    @pytest.mark.parametrize("rate", ["0", "-5"])
    def test_non_positive_rate_is_zero(self, rate):
        assert compute_amount(_make_record("8", "2", rate=rate, sick="3")) == Decimal("0.00")

    def test_rounded_to_cents(self):
        assert compute_amount(_make_record("1.33", rate="17.77")) == Decimal("23.63")

    def test_custom_multiplier(self):
        assert compute_amount(_make_record("0", "2"), overtime_multiplier=Decimal("2")) == Decimal("80.00")


class TestComputeDailyAmounts:
    def test_sets_amount_on_each_record(self):
        records = [_make_record("3"), _make_record("34", "6")]
        compute_daily_amounts(records)
        assert [r.amount for r in records] == [Decimal("60.00"), Decimal("860.00")]
