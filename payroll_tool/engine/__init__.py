"""Payroll aggregation, overtime allocation and reconciliation engines."""
from payroll_tool.engine.validator import validate_payload
from payroll_tool.engine.merger import merge_by_staff_date
from payroll_tool.engine.overtime import allocate_regular_overtime, fetch_week_carry_in
from payroll_tool.engine.calculator import compute_daily_amounts
from payroll_tool.engine.monthly import append_monthly_totals
from payroll_tool.engine.reconcile import split_adds_edits
from payroll_tool.engine.pipeline import run_payroll
from payroll_tool.engine.leave_accrual import accrue_leave

__all__ = [
    "validate_payload",
    "merge_by_staff_date",
    "fetch_week_carry_in",
    "allocate_regular_overtime",
    "compute_daily_amounts",
    "append_monthly_totals",
    "split_adds_edits",
    "run_payroll",
    "accrue_leave",
]
