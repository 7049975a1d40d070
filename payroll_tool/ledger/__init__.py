"""External ledger access: protocol, selectors, AppSheet and in-memory backends."""
from payroll_tool.ledger.appsheet import AppSheetLedger
from payroll_tool.ledger.lookup import batched_find
from payroll_tool.ledger.memory import MemoryLedger
from payroll_tool.ledger.protocols import Ledger, LedgerRow
from payroll_tool.ledger.selectors import And, Eq, Or, Selector, any_of

__all__ = [
    "AppSheetLedger",
    "And",
    "Eq",
    "Ledger",
    "LedgerRow",
    "MemoryLedger",
    "Or",
    "Selector",
    "any_of",
    "batched_find",
]
