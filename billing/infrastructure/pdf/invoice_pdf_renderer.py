"""
Invoice PDF renderer using fpdf2.

Renders the customer-facing invoice: company header, bill-to block,
item table with MRP and per-line savings, totals with a "You Saved"
line when any item was sold below its MRP, notes and footer.
"""

from decimal import Decimal

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from billing.config import get_logger
from billing.config.settings import PdfSettings, get_settings
from billing.core.entities.invoice import Invoice
from billing.core.exceptions import ExportError
from billing.core.interfaces.exporters import IInvoicePdfRenderer
from billing.infrastructure.pdf.base import BillingPdf, format_money, safe_text

logger = get_logger(__name__)

_DATE_FORMAT = "%m/%d/%Y"
_COL_WIDTHS = [62, 18, 26, 26, 30, 28]
_HEADERS = ["Description", "Qty", "MRP", "Price", "Total", "Savings"]


class Fpdf2InvoiceRenderer(IInvoicePdfRenderer):
    """Renders invoice PDFs using fpdf2."""

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings

    def render(self, invoice: Invoice) -> bytes:
        """Render an invoice into PDF bytes."""
        pdf = BillingPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        try:
            pdf.company_block()
            self._render_title(pdf, invoice)
            pdf.separator()
            self._render_bill_to(pdf, invoice)
            total_savings = self._render_items_table(pdf, invoice)
            self._render_totals(pdf, invoice, total_savings)
            self._render_notes(pdf, invoice)
            data = bytes(pdf.output())
        except (FPDFException, OSError) as e:
            logger.error("invoice_pdf_failed", invoice_id=invoice.id, error=str(e))
            raise ExportError(f"invoice {invoice.invoice_number}", str(e)) from e

        logger.info(
            "invoice_pdf_rendered",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            size=len(data),
        )
        return data

    def _money(self, value: Decimal | None) -> str:
        return format_money(value, self._settings.currency_symbol)

    @staticmethod
    def _render_title(pdf: FPDF, invoice: Invoice) -> None:
        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 18)
        pdf.cell(0, 12, "INVOICE", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(
            0, 6, f"Invoice #: {invoice.invoice_number or ''}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(
            0, 6, f"Invoice Date: {invoice.invoice_date.strftime(_DATE_FORMAT)}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        if invoice.due_date:
            pdf.cell(
                0, 6, f"Due Date: {invoice.due_date.strftime(_DATE_FORMAT)}",
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
        pdf.cell(
            0, 6, f"Status: {invoice.status.value}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(2)

    @staticmethod
    def _render_bill_to(pdf: FPDF, invoice: Invoice) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "Bill To:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        lines = [
            invoice.customer_name,
            f"Email: {invoice.customer_email}" if invoice.customer_email else None,
            f"Phone: {invoice.customer_phone}" if invoice.customer_phone else None,
            f"Address: {invoice.customer_address}" if invoice.customer_address else None,
        ]
        for line in lines:
            if line:
                pdf.cell(0, 5, safe_text(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    def _render_items_table(self, pdf: BillingPdf, invoice: Invoice) -> Decimal:
        """Render item rows and return the summed savings."""
        pdf.table_header(_HEADERS, _COL_WIDTHS)

        total_savings = Decimal("0")
        for idx, item in enumerate(invoice.items, 1):
            savings = item.savings
            total_savings += savings
            description = item.description or item.product_name or ""
            pdf.table_row(
                [
                    description[:40],
                    f"{item.quantity:f}",
                    self._money(item.product_mrp),
                    self._money(item.unit_price),
                    self._money(item.total_price),
                    self._money(savings) if savings > 0 else "-",
                ],
                _COL_WIDTHS,
                idx,
            )

        pdf.ln(3)
        return total_savings

    def _render_totals(
        self, pdf: FPDF, invoice: Invoice, total_savings: Decimal
    ) -> None:
        pdf.set_font("Helvetica", "", 10)
        rows = [("Subtotal:", invoice.subtotal)]
        if invoice.tax_amount:
            rows.append(("Tax:", invoice.tax_amount))
        if invoice.discount_amount:
            rows.append(("Discount:", invoice.discount_amount))
        for label, value in rows:
            pdf.cell(130, 6, label, align="R")
            pdf.cell(0, 6, self._money(value), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(130, 8, "Total:", align="R")
        pdf.cell(
            0, 8, self._money(invoice.total_amount), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        if total_savings > 0:
            pdf.set_font("Helvetica", "B", 10)
            pdf.set_text_color(0, 128, 0)
            pdf.cell(130, 6, "You Saved:", align="R")
            pdf.cell(
                0, 6, self._money(total_savings), align="R",
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
            pdf.set_text_color(0, 0, 0)
        pdf.ln(3)

    @staticmethod
    def _render_notes(pdf: FPDF, invoice: Invoice) -> None:
        if not invoice.notes:
            return
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 6, "Notes:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(0, 5, safe_text(invoice.notes))
