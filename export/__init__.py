"""Export module: CSV reports and the Excel workbook (openpyxl)."""

from export.excel_export import RosterExcelExporter
from export.reports import ReportWriter

__all__ = ["RosterExcelExporter", "ReportWriter"]
