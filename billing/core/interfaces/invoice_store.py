"""Abstract interface for invoice storage."""

from abc import ABC, abstractmethod
from datetime import date

from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.interfaces.transaction import Transaction


class IInvoiceStore(ABC):
    """Interface for invoice persistence. Invoices are loaded with their items."""

    @abstractmethod
    async def create_invoice(
        self, invoice: Invoice, tx: Transaction | None = None
    ) -> Invoice:
        """Insert an invoice with all its items."""
        pass

    @abstractmethod
    async def get_invoice(
        self, invoice_id: int, tx: Transaction | None = None
    ) -> Invoice | None:
        """Get invoice by ID with items, regardless of owner."""
        pass

    @abstractmethod
    async def update_invoice(
        self, invoice: Invoice, tx: Transaction | None = None
    ) -> Invoice:
        """Update header fields and replace the stored item list."""
        pass

    @abstractmethod
    async def update_status(
        self, invoice_id: int, status: InvoiceStatus, tx: Transaction | None = None
    ) -> None:
        """Overwrite an invoice's status."""
        pass

    @abstractmethod
    async def delete_invoice(
        self, invoice_id: int, tx: Transaction | None = None
    ) -> None:
        """Delete an invoice and, by cascade, its items."""
        pass

    @abstractmethod
    async def next_invoice_sequence(
        self, tenant_id: int, tx: Transaction | None = None
    ) -> int:
        """Atomically allocate the tenant's next invoice sequence value."""
        pass

    @abstractmethod
    async def count_invoices(self, tenant_id: int) -> int:
        """Count a tenant's invoices."""
        pass

    @abstractmethod
    async def list_invoices(
        self, tenant_id: int, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        """List a tenant's invoices, newest first."""
        pass

    @abstractmethod
    async def search_invoices(
        self, tenant_id: int, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        """Case-insensitive search over customer name and invoice number."""
        pass

    @abstractmethod
    async def list_by_status(
        self, tenant_id: int, status: InvoiceStatus
    ) -> list[Invoice]:
        """List a tenant's invoices in one status."""
        pass

    @abstractmethod
    async def list_overdue(self, tenant_id: int, today: date) -> list[Invoice]:
        """List SENT invoices whose due date is strictly before *today*."""
        pass

    @abstractmethod
    async def list_in_date_range(
        self,
        tenant_id: int,
        start_date: date,
        end_date: date,
        status: InvoiceStatus | None = None,
    ) -> list[Invoice]:
        """List invoices dated within [start_date, end_date], optionally by status."""
        pass
