"""Excel export of computed payroll rows.

Writes a fresh workbook with a Daily sheet and a Monthly Totals sheet.
All values are pre-computed in Python; no formulas are written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from payroll_tool.models import LEDGER_COLUMNS
from payroll_tool.parsers.values import parse_mdy

DAILY_SHEET = "Daily"
TOTALS_SHEET = "Monthly Totals"
HEADER_ROW = 1
DATA_START_ROW = 2

HOUR_COLUMNS = {
    "Hours in Office", "Hours in Lunch", "Net Hours", "Regular", "Overtime",
    "Sick Hrs", "Holiday Hrs", "Vacation Hrs", "Funeral Leave",
    "Personal Leave", "Leave Without Pay",
}
MONEY_COLUMNS = {"Hourly Rate", "Amount"}

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)

HEADER_FONT = Font(name='Calibri', size=11, bold=True)
DATA_FONT = Font(name='Calibri', size=11)
HEADER_FILL = PatternFill(start_color='D9E1F2', end_color='D9E1F2', fill_type='solid')
CENTER_ALIGN = Alignment(horizontal='center', vertical='center', wrap_text=True)
DOLLAR_FORMAT = '_("$"* #,##0.00_);_("$"* \\(#,##0.00\\);_("$"* "-"??_);_(@_)'
NUMBER_FORMAT = '#,##0.00'
DATE_FORMAT = 'm/d/yyyy'


def _is_total_row(row: dict[str, Any]) -> bool:
    return str(row.get("Workday")) == "Total" or str(row.get("Record ID", "")).startswith("Total-")


def _write_sheet(ws, rows: list[dict[str, Any]]) -> None:
    for col, name in enumerate(LEDGER_COLUMNS, start=1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER_ALIGN
        cell.border = THIN_BORDER
        ws.column_dimensions[get_column_letter(col)].width = max(12, len(name) + 2)

    for r_idx, row in enumerate(rows, start=DATA_START_ROW):
        for col, name in enumerate(LEDGER_COLUMNS, start=1):
            value = row.get(name)
            if name == "Date" and isinstance(value, str):
                value = parse_mdy(value) or value
            cell = ws.cell(row=r_idx, column=col, value=value)
            cell.font = DATA_FONT
            cell.border = THIN_BORDER
            if name == "Date":
                cell.number_format = DATE_FORMAT
            elif name in HOUR_COLUMNS:
                cell.number_format = NUMBER_FORMAT
            elif name in MONEY_COLUMNS:
                cell.number_format = DOLLAR_FORMAT

    ws.freeze_panes = ws.cell(row=DATA_START_ROW, column=1)


def generate_excel_report(rows: list[dict[str, Any]], output_path: str | Path) -> Path:
    """Write ledger-shaped rows to an .xlsx file, split into daily and totals sheets."""
    output_path = Path(output_path)

    daily = [r for r in rows if not _is_total_row(r)]
    totals = [r for r in rows if _is_total_row(r)]

    wb = openpyxl.Workbook()
    ws_daily = wb.active
    ws_daily.title = DAILY_SHEET
    _write_sheet(ws_daily, daily)
    _write_sheet(wb.create_sheet(TOTALS_SHEET), totals)

    wb.save(str(output_path))
    return output_path
