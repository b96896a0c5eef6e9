"""Update Invoice Status Use Case."""

from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.tenant import TenantContext

logger = get_logger(__name__)


class UpdateInvoiceStatusUseCase(BillingUseCase):
    """
    Overwrite an invoice's status.

    Any status may follow any other, including leaving PAID. Only
    ownership is checked; stock is never touched.
    """

    async def execute(
        self, tenant: TenantContext, invoice_id: int, status: InvoiceStatus
    ) -> Invoice:
        invoice_store = await self._get_invoice_store()
        tx_manager = await self._get_transaction_manager()

        async with tx_manager.transaction() as tx:
            invoice = await self._require_invoice(tenant, invoice_id, tx)
            previous = invoice.status
            await invoice_store.update_status(invoice_id, status, tx=tx)
            invoice.status = status

        logger.info(
            "invoice_status_changed",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice_id,
            invoice_number=invoice.invoice_number,
            previous=previous.value,
            status=status.value,
        )
        return invoice
