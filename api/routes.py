"""API routes for the payroll engine."""

from __future__ import annotations

from typing import Any, Iterator

from fastapi import APIRouter, Body, Depends, Request

from payroll_tool.config import AppSettings
from payroll_tool.engine import accrue_leave, run_payroll
from payroll_tool.ledger import AppSheetLedger, Ledger

from api.schemas import LeaveAccrualResponse, PayrollRunResponse

router = APIRouter(prefix="/api/v1")


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_payroll_ledger(settings: AppSettings = Depends(get_settings)) -> Iterator[Ledger]:
    with AppSheetLedger(settings.ledger) as ledger:
        yield ledger


def get_leave_bucket_ledger(settings: AppSettings = Depends(get_settings)) -> Iterator[Ledger]:
    with AppSheetLedger(settings.ledger, table=settings.ledger.leave_bucket_table) as ledger:
        yield ledger


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/payroll/run", response_model=PayrollRunResponse, response_model_exclude_none=True)
def payroll_run(
    payload: Any = Body(None),
    settings: AppSettings = Depends(get_settings),
    ledger: Ledger = Depends(get_payroll_ledger),
):
    """Merge time/lunch/leave rows, allocate overtime and upsert to the Payroll table.

    Failures come back as {"ok": false, "error": ...} with HTTP 200, the
    same as the engine result.
    """
    return run_payroll(payload, ledger, settings.engine)


@router.post("/leave-bucket/run", response_model=LeaveAccrualResponse, response_model_exclude_none=True)
def leave_bucket_run(
    payload: Any = Body(None),
    ledger: Ledger = Depends(get_leave_bucket_ledger),
):
    """Earn leave hours from worked hours and add them to the leave bucket table."""
    return accrue_leave(payload, ledger)
