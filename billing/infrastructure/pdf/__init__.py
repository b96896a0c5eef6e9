"""PDF generation infrastructure."""

from billing.infrastructure.pdf.invoice_pdf_renderer import Fpdf2InvoiceRenderer
from billing.infrastructure.pdf.report_pdf_exporter import Fpdf2ReportExporter

__all__ = [
    "Fpdf2InvoiceRenderer",
    "Fpdf2ReportExporter",
]
