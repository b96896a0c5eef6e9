"""Read-only, tenant-scoped invoice queries."""

from collections.abc import Callable
from datetime import date

from billing.application.use_cases.base import BillingUseCase
from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.tenant import TenantContext
from billing.core.interfaces import IInvoiceStore


class QueryInvoicesUseCase(BillingUseCase):
    """Get, list, search and filter a tenant's invoices."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(invoice_store=invoice_store)
        self._today = today

    async def get_invoice(self, tenant: TenantContext, invoice_id: int) -> Invoice:
        return await self._require_invoice(tenant, invoice_id)

    async def list_invoices(
        self, tenant: TenantContext, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        store = await self._get_invoice_store()
        return await store.list_invoices(tenant.tenant_id, limit=limit, offset=offset)

    async def count_invoices(self, tenant: TenantContext) -> int:
        store = await self._get_invoice_store()
        return await store.count_invoices(tenant.tenant_id)

    async def search_invoices(
        self, tenant: TenantContext, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        """Case-insensitive match on customer name or invoice number."""
        store = await self._get_invoice_store()
        keyword = keyword.strip()
        if not keyword:
            return await store.list_invoices(tenant.tenant_id, limit=limit, offset=offset)
        return await store.search_invoices(
            tenant.tenant_id, keyword, limit=limit, offset=offset
        )

    async def list_by_status(
        self, tenant: TenantContext, status: InvoiceStatus
    ) -> list[Invoice]:
        store = await self._get_invoice_store()
        return await store.list_by_status(tenant.tenant_id, status)

    async def list_overdue(self, tenant: TenantContext) -> list[Invoice]:
        """SENT invoices whose due date is strictly before today."""
        store = await self._get_invoice_store()
        return await store.list_overdue(tenant.tenant_id, self._today())
