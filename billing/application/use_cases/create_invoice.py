"""Create Invoice Use Case: numbers the invoice and consumes stock atomically."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from billing.application.dto.requests import InvoiceRequest
from billing.application.dto.responses import InvoiceResponse, invoice_to_response
from billing.application.services import (
    get_invoice_number_generator,
    get_stock_reconciler,
)
from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.tenant import TenantContext
from billing.core.interfaces import IInvoiceStore, IProductStore, ITransactionManager

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice


class CreateInvoiceUseCase(BillingUseCase):
    """
    Create an invoice for a tenant.

    Flow (one transaction):
    1. Validate every item against the tenant's catalog
    2. Allocate the next invoice number
    3. Consume stock for every item
    4. Persist header and items
    """

    def __init__(
        self,
        product_store: IProductStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        transaction_manager: ITransactionManager | None = None,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(product_store, invoice_store, transaction_manager)
        self._today = today

    async def execute(
        self, tenant: TenantContext, request: InvoiceRequest
    ) -> CreateInvoiceResult:
        logger.info(
            "create_invoice_started",
            tenant_id=tenant.tenant_id,
            items=len(request.items),
        )

        product_store = await self._get_product_store()
        invoice_store = await self._get_invoice_store()
        tx_manager = await self._get_transaction_manager()
        reconciler = get_stock_reconciler(product_store)
        numbering = get_invoice_number_generator(invoice_store, today=self._today)

        async with tx_manager.transaction() as tx:
            items = await self._build_items(tenant, request.items, tx)

            invoice = Invoice(
                tenant_id=tenant.tenant_id,
                invoice_number=await numbering.next_number(tenant.tenant_id, tx=tx),
                invoice_date=request.invoice_date or self._today(),
                due_date=request.due_date,
                customer_name=request.customer_name,
                customer_email=request.customer_email,
                customer_phone=request.customer_phone,
                customer_address=request.customer_address,
                tax_amount=request.tax_amount,
                discount_amount=request.discount_amount,
                status=request.status or InvoiceStatus.DRAFT,
                notes=request.notes,
                items=items,
            )

            await reconciler.consume(invoice.items, tx=tx)
            invoice = await invoice_store.create_invoice(invoice, tx=tx)

        logger.info(
            "create_invoice_complete",
            tenant_id=tenant.tenant_id,
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=str(invoice.total_amount),
        )
        return CreateInvoiceResult(invoice=invoice)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        return invoice_to_response(result.invoice)
