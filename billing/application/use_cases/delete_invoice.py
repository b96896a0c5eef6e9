"""Delete Invoice Use Case: restores stock, then removes the invoice."""

from billing.application.services import get_stock_reconciler
from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.tenant import TenantContext

logger = get_logger(__name__)


class DeleteInvoiceUseCase(BillingUseCase):
    """Delete a non-paid invoice owned by the tenant."""

    async def execute(self, tenant: TenantContext, invoice_id: int) -> None:
        logger.info(
            "delete_invoice_started",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice_id,
        )

        product_store = await self._get_product_store()
        invoice_store = await self._get_invoice_store()
        tx_manager = await self._get_transaction_manager()
        reconciler = get_stock_reconciler(product_store)

        async with tx_manager.transaction() as tx:
            invoice = await self._require_invoice(tenant, invoice_id, tx)
            invoice.ensure_mutable("delete")

            await reconciler.restore(invoice.items, tx=tx)
            await invoice_store.delete_invoice(invoice_id, tx=tx)

        logger.info(
            "delete_invoice_complete",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice_id,
            invoice_number=invoice.invoice_number,
        )
