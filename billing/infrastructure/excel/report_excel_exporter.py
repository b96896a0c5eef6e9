"""
Report export to Excel using openpyxl.

Layout: report title, period, total revenue, a blank row, then one block
per populated section (summary, status, trend, products, months) and
finally the additional key/value data.
"""

import re
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from billing.config import get_logger
from billing.core.entities.report import Report
from billing.core.exceptions import ExportError
from billing.core.interfaces.exporters import IReportExporter

logger = get_logger(__name__)

_BOLD = Font(bold=True)
_INVALID_SHEET_CHARS = re.compile(r"[\\/*?:\[\]]")
_MAX_SHEET_TITLE = 31


def _sheet_title(report_type: str) -> str:
    title = _INVALID_SHEET_CHARS.sub(" ", report_type).strip()
    return title[:_MAX_SHEET_TITLE] or "Report"


class OpenpyxlReportExporter(IReportExporter):
    """Writes a report into a single-sheet XLSX workbook."""

    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    file_extension = "xlsx"

    def export(self, report: Report) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = _sheet_title(report.report_type)

        ws.append([report.report_type])
        ws.cell(row=1, column=1).font = _BOLD
        if report.start_date and report.end_date:
            ws.append(["Period:", f"{report.start_date} to {report.end_date}"])
        ws.append(["Total Revenue:", report.total_revenue])
        ws.append([])

        if report.summary is not None:
            s = report.summary
            self._block(
                ws,
                "Summary",
                None,
                [
                    ["Total Invoices", s.total_invoices],
                    ["Total Revenue", s.total_revenue],
                    ["Average Invoice Value", s.average_invoice_value],
                    ["Pending Invoices", s.pending_invoices],
                ],
            )
        if report.status_distribution:
            self._block(
                ws,
                "Invoice Status",
                ["Status", "Count"],
                [[e.status, e.count] for e in report.status_distribution],
            )
        if report.sales_trend:
            self._block(
                ws,
                "Sales Trend",
                ["Date", "Revenue"],
                [[p.date, p.amount] for p in report.sales_trend],
            )
        if report.top_products:
            self._block(
                ws,
                "Top Products",
                ["Product", "Quantity", "Revenue"],
                [[p.product_name, p.quantity, p.revenue] for p in report.top_products],
            )
        if report.monthly_breakdown:
            self._block(
                ws,
                "Monthly Breakdown",
                ["Year", "Month", "Revenue"],
                [[m.year, m.month, m.total] for m in report.monthly_breakdown],
            )

        for key, value in report.additional_data.items():
            ws.append([str(key), str(value)])

        self._autosize(ws)

        buffer = BytesIO()
        try:
            wb.save(buffer)
        except (OSError, ValueError) as e:
            logger.error("report_excel_failed", report_type=report.report_type, error=str(e))
            raise ExportError(f"report {report.report_type}", str(e)) from e

        logger.info("report_exported", report_type=report.report_type, format="xlsx")
        return buffer.getvalue()

    @staticmethod
    def _block(
        ws: Worksheet,
        title: str,
        headers: list[str] | None,
        rows: list[list[Any]],
    ) -> None:
        ws.append([title])
        ws.cell(row=ws.max_row, column=1).font = _BOLD
        if headers:
            ws.append(headers)
            for col in range(1, len(headers) + 1):
                ws.cell(row=ws.max_row, column=col).font = _BOLD
        for row in rows:
            ws.append(row)
        ws.append([])

    @staticmethod
    def _autosize(ws: Worksheet) -> None:
        for column in ws.columns:
            width = max((len(str(c.value)) for c in column if c.value is not None), default=8)
            ws.column_dimensions[column[0].column_letter].width = min(width + 2, 60)
