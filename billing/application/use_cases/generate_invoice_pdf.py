"""
Generate Invoice PDF Use Case.

Loads a tenant's invoice with its items and hands it to the PDF renderer.
"""

from dataclasses import dataclass

from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.tenant import TenantContext
from billing.core.interfaces import IInvoicePdfRenderer, IInvoiceStore

logger = get_logger(__name__)


@dataclass
class InvoicePdfResult:
    invoice_number: str
    content: bytes

    @property
    def filename(self) -> str:
        return f"invoice-{self.invoice_number}.pdf"


class GenerateInvoicePdfUseCase(BillingUseCase):
    """Render an owned invoice to PDF bytes."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        renderer: IInvoicePdfRenderer | None = None,
    ):
        super().__init__(invoice_store=invoice_store)
        self._renderer = renderer

    def _get_renderer(self) -> IInvoicePdfRenderer:
        if self._renderer is None:
            from billing.infrastructure.pdf import Fpdf2InvoiceRenderer

            self._renderer = Fpdf2InvoiceRenderer()
        return self._renderer

    async def execute(self, tenant: TenantContext, invoice_id: int) -> InvoicePdfResult:
        logger.info(
            "generate_invoice_pdf_started",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice_id,
        )
        invoice = await self._require_invoice(tenant, invoice_id)
        content = self._get_renderer().render(invoice)

        logger.info(
            "generate_invoice_pdf_complete",
            invoice_id=invoice_id,
            file_size=len(content),
        )
        return InvoicePdfResult(invoice_number=invoice.invoice_number or str(invoice_id), content=content)
