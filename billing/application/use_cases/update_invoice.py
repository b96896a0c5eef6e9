"""Update Invoice Use Case: replaces items and re-reconciles stock."""

from dataclasses import dataclass

from billing.application.dto.requests import InvoiceRequest
from billing.application.dto.responses import InvoiceResponse, invoice_to_response
from billing.application.services import get_stock_reconciler
from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.invoice import Invoice
from billing.core.entities.tenant import TenantContext

logger = get_logger(__name__)


@dataclass
class UpdateInvoiceResult:
    invoice: Invoice


class UpdateInvoiceUseCase(BillingUseCase):
    """
    Update a non-paid invoice owned by the tenant.

    All previous items are restored to stock and all new items consumed,
    never a per-item diff. Invoice id and number are kept.
    """

    async def execute(
        self, tenant: TenantContext, invoice_id: int, request: InvoiceRequest
    ) -> UpdateInvoiceResult:
        logger.info(
            "update_invoice_started",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice_id,
            items=len(request.items),
        )

        product_store = await self._get_product_store()
        invoice_store = await self._get_invoice_store()
        tx_manager = await self._get_transaction_manager()
        reconciler = get_stock_reconciler(product_store)

        async with tx_manager.transaction() as tx:
            invoice = await self._require_invoice(tenant, invoice_id, tx)
            invoice.ensure_mutable("update")

            new_items = await self._build_items(tenant, request.items, tx)

            old_items = invoice.clear_items()
            await reconciler.replace(old_items, new_items, tx=tx)

            if request.invoice_date is not None:
                invoice.invoice_date = request.invoice_date
            invoice.due_date = request.due_date
            invoice.customer_name = request.customer_name
            invoice.customer_email = request.customer_email
            invoice.customer_phone = request.customer_phone
            invoice.customer_address = request.customer_address
            invoice.tax_amount = request.tax_amount
            invoice.discount_amount = request.discount_amount
            invoice.notes = request.notes
            if request.status is not None:
                invoice.status = request.status
            for item in new_items:
                invoice.add_item(item)

            invoice = await invoice_store.update_invoice(invoice, tx=tx)

        logger.info(
            "update_invoice_complete",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice.id,
            total=str(invoice.total_amount),
        )
        return UpdateInvoiceResult(invoice=invoice)

    def to_response(self, result: UpdateInvoiceResult) -> InvoiceResponse:
        return invoice_to_response(result.invoice)
