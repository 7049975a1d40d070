"""Payload validation.

Checks the payload shape before any aggregation. Individual malformed rows
are not errors; they are dropped later by the source row parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from payroll_tool.models import PayloadValidationError

STREAM_KEYS = ("timeSheetData", "lunchSheetData", "leaveSheetData")


@dataclass
class PayrollPayload:
    """The three raw input streams, each a list of loosely-typed rows."""
    time_rows: list[Any] = field(default_factory=list)
    lunch_rows: list[Any] = field(default_factory=list)
    leave_rows: list[Any] = field(default_factory=list)


def validate_payload(payload: Any) -> PayrollPayload:
    """Validate the request payload and return its streams.

    Missing or null streams are treated as empty. A stream that is present
    but not a list is an error.
    """
    errors: list[str] = []

    if not isinstance(payload, dict):
        errors.append(f"Payload is missing or not an object (got {type(payload).__name__})")
        raise PayloadValidationError(errors)

    streams: dict[str, list[Any]] = {}
    for key in STREAM_KEYS:
        value = payload.get(key)
        if value is None:
            streams[key] = []
        elif isinstance(value, list):
            streams[key] = value
        else:
            errors.append(f"'{key}' must be an array, got {type(value).__name__}")

    if errors:
        raise PayloadValidationError(errors)

    return PayrollPayload(
        time_rows=streams["timeSheetData"],
        lunch_rows=streams["lunchSheetData"],
        leave_rows=streams["leaveSheetData"],
    )
