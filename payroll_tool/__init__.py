"""Payroll aggregation, overtime allocation and ledger reconciliation."""

__version__ = "1.0.0"
