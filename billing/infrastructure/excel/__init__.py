"""Excel export infrastructure."""

from billing.infrastructure.excel.report_excel_exporter import OpenpyxlReportExporter

__all__ = ["OpenpyxlReportExporter"]
