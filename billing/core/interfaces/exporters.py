"""Abstract interfaces for invoice and report exporters."""

from abc import ABC, abstractmethod

from billing.core.entities.invoice import Invoice
from billing.core.entities.report import Report


class IInvoicePdfRenderer(ABC):
    """Renders a fully materialized invoice to PDF bytes."""

    @abstractmethod
    def render(self, invoice: Invoice) -> bytes:
        """Render an invoice into PDF bytes."""
        ...


class IReportExporter(ABC):
    """Renders a finished report into a downloadable document."""

    media_type: str
    file_extension: str

    @abstractmethod
    def export(self, report: Report) -> bytes:
        """Render a report into document bytes."""
        ...
