"""Report export to PDF using fpdf2."""

from decimal import Decimal

from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from billing.config import get_logger
from billing.config.settings import PdfSettings, get_settings
from billing.core.entities.report import Report
from billing.core.exceptions import ExportError
from billing.core.interfaces.exporters import IReportExporter
from billing.infrastructure.pdf.base import BillingPdf, format_money, safe_text

logger = get_logger(__name__)


class Fpdf2ReportExporter(IReportExporter):
    """
    Renders a report as a PDF document.

    Sections without data are omitted, so a daily report with no sales
    still produces a valid single-page document.
    """

    media_type = "application/pdf"
    file_extension = "pdf"

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings

    def export(self, report: Report) -> bytes:
        pdf = BillingPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        try:
            pdf.company_block()
            self._render_heading(pdf, report)
            pdf.separator()
            self._render_summary(pdf, report)
            self._render_tables(pdf, report)
            self._render_additional_data(pdf, report)
            data = bytes(pdf.output())
        except (FPDFException, OSError) as e:
            logger.error("report_pdf_failed", report_type=report.report_type, error=str(e))
            raise ExportError(f"report {report.report_type}", str(e)) from e

        logger.info("report_exported", report_type=report.report_type, format="pdf")
        return data

    def _money(self, value: Decimal | None) -> str:
        return format_money(value, self._settings.currency_symbol)

    def _render_heading(self, pdf: BillingPdf, report: Report) -> None:
        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(
            0, 10, safe_text(report.report_type), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.set_font("Helvetica", "", 10)
        if report.start_date and report.end_date:
            pdf.cell(
                0, 6, f"Period: {report.start_date} to {report.end_date}", align="C",
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(
            0, 8, f"Total Revenue: {self._money(report.total_revenue)}", align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(2)

    def _render_summary(self, pdf: BillingPdf, report: Report) -> None:
        if report.summary is None:
            return
        summary = report.summary
        self._section(pdf, "Summary")
        widths = [80, 60]
        rows = [
            ("Total Invoices", str(summary.total_invoices)),
            ("Total Revenue", self._money(summary.total_revenue)),
            ("Average Invoice Value", self._money(summary.average_invoice_value)),
            ("Pending Invoices", str(summary.pending_invoices)),
        ]
        for idx, (label, value) in enumerate(rows, 1):
            pdf.table_row([label, value], widths, idx)
        pdf.ln(3)

    def _render_tables(self, pdf: BillingPdf, report: Report) -> None:
        if report.status_distribution:
            self._section(pdf, "Invoice Status")
            widths = [80, 40]
            pdf.table_header(["Status", "Count"], widths)
            for idx, entry in enumerate(report.status_distribution, 1):
                pdf.table_row([entry.status, str(entry.count)], widths, idx)
            pdf.ln(3)

        if report.sales_trend:
            self._section(pdf, "Sales Trend")
            widths = [60, 60]
            pdf.table_header(["Date", "Revenue"], widths)
            for idx, point in enumerate(report.sales_trend, 1):
                pdf.table_row([point.date.isoformat(), self._money(point.amount)], widths, idx)
            pdf.ln(3)

        if report.top_products:
            self._section(pdf, "Top Products")
            widths = [90, 40, 50]
            pdf.table_header(["Product", "Quantity", "Revenue"], widths)
            for idx, product in enumerate(report.top_products, 1):
                pdf.table_row(
                    [product.product_name, f"{product.quantity:f}", self._money(product.revenue)],
                    widths,
                    idx,
                )
            pdf.ln(3)

        if report.monthly_breakdown:
            self._section(pdf, "Monthly Breakdown")
            widths = [60, 60]
            pdf.table_header(["Month", "Revenue"], widths)
            for idx, entry in enumerate(report.monthly_breakdown, 1):
                pdf.table_row(
                    [f"{entry.year}-{entry.month:02d}", self._money(entry.total)], widths, idx
                )
            pdf.ln(3)

    def _render_additional_data(self, pdf: BillingPdf, report: Report) -> None:
        if not report.additional_data:
            return
        self._section(pdf, "Details")
        widths = [60, 120]
        for idx, (key, value) in enumerate(report.additional_data.items(), 1):
            pdf.table_row([str(key), str(value)], widths, idx, numeric_from=2)

    @staticmethod
    def _section(pdf: BillingPdf, title: str) -> None:
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(0, 8, title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
