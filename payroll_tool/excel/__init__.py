"""Excel report output."""
from payroll_tool.excel.generator import generate_excel_report

__all__ = ["generate_excel_report"]
