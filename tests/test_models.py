"""Tests for data models."""

from datetime import date
from decimal import Decimal

from payroll_tool.models import (
    LEDGER_COLUMNS,
    DailyRecord,
    LeaveBucket,
    LedgerConfigError,
    LedgerError,
    PayloadValidationError,
    PayrollError,
)


def _make_record(**overrides) -> DailyRecord:
    values = dict(
        record_id="A-8/4/2025",
        staff="A",
        date=date(2025, 8, 4),
        year=2025,
        month="2025-Aug",
        week=32,
        day=4,
        workday="Monday",
        hours_in_office=Decimal("9.00"),
        hours_in_lunch=Decimal("1.00"),
        net_hours=Decimal("8.00"),
        regular=Decimal("8.00"),
        hourly_rate=Decimal("20"),
        amount=Decimal("160.00"),
    )
    values.update(overrides)
    return DailyRecord(**values)


class TestLeaveBucket:
    def test_only_leave_without_pay_is_unpaid(self):
        unpaid = [b for b in LeaveBucket if not b.is_paid]
        assert unpaid == [LeaveBucket.LEAVE_WITHOUT_PAY]

    def test_values_are_ledger_columns(self):
        assert all(b.value in LEDGER_COLUMNS for b in LeaveBucket)


class TestDailyRecord:
    def test_defaults_are_zero(self):
        record = DailyRecord("A-8/4/2025", "A", date(2025, 8, 4), 2025, "2025-Aug", 32, 4, "Monday")
        assert record.net_hours == Decimal("0")
        assert set(record.leave_hours) == set(LeaveBucket)
        assert record.paid_leave_hours == Decimal("0")

    def test_leave_dicts_not_shared(self):
        a = _make_record()
        b = _make_record()
        a.leave_hours[LeaveBucket.SICK] = Decimal("4")
        assert b.leave_hours[LeaveBucket.SICK] == Decimal("0")

    def test_paid_leave_excludes_lwp(self):
        record = _make_record()
        record.leave_hours[LeaveBucket.VACATION] = Decimal("4")
        record.leave_hours[LeaveBucket.LEAVE_WITHOUT_PAY] = Decimal("8")
        assert record.paid_leave_hours == Decimal("4")

    def test_staff_week(self):
        assert _make_record().staff_week == ("A", 2025, 32)

    def test_to_ledger_row(self):
        record = _make_record(date=date(2025, 8, 4))
        record.leave_hours[LeaveBucket.HOLIDAY] = Decimal("2.50")
        row = record.to_ledger_row()

        assert list(row) == list(LEDGER_COLUMNS)
        assert row["Date"] == "8/4/2025"
        assert row["Net Hours"] == 8.0
        assert row["Holiday Hrs"] == 2.5
        assert row["Amount"] == 160.0
        assert isinstance(row["Year"], int)


class TestErrors:
    def test_validation_error_lists_errors(self):
        err = PayloadValidationError(["first", "second"])
        assert err.errors == ["first", "second"]
        assert "2 error(s)" in str(err)
        assert "  - second" in str(err)
        assert isinstance(err, PayrollError)

    def test_ledger_error_context(self):
        err = LedgerConfigError("missing credentials", action="Find", table="Payroll")
        assert isinstance(err, LedgerError)
        assert (err.action, err.table) == ("Find", "Payroll")
        assert str(err) == "missing credentials"
