"""Pydantic response models for the Payroll API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ActionResult(BaseModel):
    type: str
    count: int
    status: Any = None
    raw: dict[str, Any] | None = None
    rows: list[dict[str, Any]] | None = None


class PayrollRunResponse(BaseModel):
    ok: bool
    adds: int | None = None
    edits: int | None = None
    ms: int | None = None
    results: list[ActionResult] | None = None
    error: str | None = None


class LeaveAccrualResponse(BaseModel):
    ok: bool
    added: int | None = None
    leaveType: str | None = None
    bonusPerhours: float | None = None
    bonushours: float | None = None
    ms: int | None = None
    appSheetStatus: Any = None
    raw: dict[str, Any] | None = None
    detail: str | None = None
    error: str | None = None
