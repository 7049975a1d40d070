"""CLI entry point.

Usage:
    python -m payroll_tool run \
        --payload "payload.json" \
        --out "Payroll_Report.xlsx" \
        --dry-run

    python -m payroll_tool accrue-leave --payload "accrual.json"
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from payroll_tool.config import AppSettings
from payroll_tool.logging_config import setup_logging

app = typer.Typer(help="Payroll aggregation and ledger upsert.")


def _load_payload(path: str) -> object:
    payload_path = Path(path)
    if not payload_path.exists():
        typer.echo(f"ERROR: Payload file not found: {payload_path}", err=True)
        raise typer.Exit(1)
    try:
        return json.loads(payload_path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        typer.echo(f"ERROR: Payload is not valid JSON: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def run(
    payload: str = typer.Option(..., "--payload", help="Path to JSON payload with timeSheetData/lunchSheetData/leaveSheetData"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Classify rows but do not write to the ledger"),
    carry_in: bool = typer.Option(True, "--carry-in/--no-carry-in", help="Seed the weekly cap from hours already in the ledger"),
    out: str = typer.Option(None, "--out", help="Optional Excel report path"),
) -> None:
    """Compute payroll rows from a payload and upsert them to the ledger."""
    from payroll_tool.engine import run_payroll
    from payroll_tool.excel import generate_excel_report
    from payroll_tool.ledger import AppSheetLedger

    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_json)

    engine_config = settings.engine.model_copy(update={
        "dry_run": dry_run or settings.engine.dry_run,
        "use_existing_week_totals": carry_in and settings.engine.use_existing_week_totals,
    })

    data = _load_payload(payload)
    with AppSheetLedger(settings.ledger) as ledger:
        result = run_payroll(data, ledger, engine_config, include_rows=bool(out))

    rows = result.pop("rows", None)
    typer.echo(json.dumps(result, indent=2, default=str))

    if not result["ok"]:
        raise typer.Exit(1)

    if out and rows is not None:
        report = generate_excel_report(rows, out)
        typer.echo(f"Excel report saved to: {report}", err=True)


@app.command("accrue-leave")
def accrue_leave_command(
    payload: str = typer.Option(..., "--payload", help="Path to JSON payload with timeSheetData, leaveType, bonusPerHours, bonusHours"),
) -> None:
    """Add earned leave hours to the leave bucket table."""
    from payroll_tool.engine import accrue_leave
    from payroll_tool.ledger import AppSheetLedger

    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_json)

    data = _load_payload(payload)
    with AppSheetLedger(settings.ledger, table=settings.ledger.leave_bucket_table) as ledger:
        result = accrue_leave(data, ledger)

    typer.echo(json.dumps(result, indent=2, default=str))
    if not result["ok"]:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
