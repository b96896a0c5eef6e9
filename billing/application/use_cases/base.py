"""
Shared plumbing for billing use cases.

Stores and the transaction manager are injectable; when omitted they are
resolved lazily from the SQLite infrastructure singletons. Ownership
checks live here so every use case enforces them the same way.
"""

from collections.abc import Iterable

from billing.application.dto.requests import InvoiceItemRequest
from billing.core.entities.invoice import Invoice, InvoiceItem
from billing.core.entities.product import Product
from billing.core.entities.tenant import TenantContext
from billing.core.exceptions import (
    FractionalQuantityError,
    InvoiceNotFoundError,
    PermissionDeniedError,
    ProductNotFoundError,
)
from billing.core.interfaces import (
    IInvoiceStore,
    IProductStore,
    ITransactionManager,
    Transaction,
)


class BillingUseCase:
    """Base class holding store and transaction dependencies."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._product_store = product_store
        self._invoice_store = invoice_store
        self._transaction_manager = transaction_manager

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from billing.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from billing.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from billing.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def _require_invoice(
        self,
        tenant: TenantContext,
        invoice_id: int,
        tx: Transaction | None = None,
    ) -> Invoice:
        """Load an invoice owned by *tenant* or raise NotFound / PermissionDenied."""
        store = await self._get_invoice_store()
        invoice = await store.get_invoice(invoice_id, tx=tx)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        if invoice.tenant_id != tenant.tenant_id:
            raise PermissionDeniedError("invoice", invoice_id, tenant.tenant_id)
        return invoice

    async def _require_product(
        self,
        tenant: TenantContext,
        product_id: int,
        tx: Transaction | None = None,
    ) -> Product:
        """Load a product owned by *tenant* or raise NotFound / PermissionDenied."""
        store = await self._get_product_store()
        product = await store.get_product(product_id, tx=tx)
        if product is None:
            raise ProductNotFoundError(product_id)
        if not product.belongs_to(tenant.tenant_id):
            raise PermissionDeniedError("product", product_id, tenant.tenant_id)
        return product

    async def _build_items(
        self,
        tenant: TenantContext,
        requests: Iterable[InvoiceItemRequest],
        tx: Transaction | None = None,
    ) -> list[InvoiceItem]:
        """
        Validate item requests and turn them into invoice items.

        Runs before any stock write: a single bad item rejects the whole
        list. Unit price and quantity come from the request, not from the
        product's current price.
        """
        items: list[InvoiceItem] = []
        for req in requests:
            product = await self._require_product(tenant, req.product_id, tx)
            if not product.unit.accepts(req.quantity):
                raise FractionalQuantityError(req.quantity, product.unit.display_name)

            items.append(
                InvoiceItem(
                    product_id=req.product_id,
                    quantity=req.quantity,
                    unit_price=req.unit_price,
                    description=req.description or product.name,
                    product_name=product.name,
                    product_code=product.code,
                    product_unit=product.unit,
                    product_mrp=product.mrp,
                )
            )
        return items
