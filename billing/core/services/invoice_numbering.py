"""
Invoice number generation.

Numbers have the form ``INV-{tenantId}-{year}-{sequence:06d}``. The
sequence comes from a per-tenant atomic counter, so numbers are unique
per tenant and never reused after a deletion.
"""

from collections.abc import Callable
from datetime import date

from billing.config import get_logger
from billing.core.interfaces.invoice_store import IInvoiceStore
from billing.core.interfaces.transaction import Transaction

logger = get_logger(__name__)

INVOICE_NUMBER_PREFIX = "INV"


def format_invoice_number(tenant_id: int, year: int, sequence: int) -> str:
    """Format an invoice number from its parts."""
    return f"{INVOICE_NUMBER_PREFIX}-{tenant_id}-{year}-{sequence:06d}"


class InvoiceNumberGenerator:
    """Allocates invoice numbers from the invoice store's tenant counter."""

    def __init__(
        self,
        invoice_store: IInvoiceStore,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._invoice_store = invoice_store
        self._today = today

    async def next_number(self, tenant_id: int, tx: Transaction | None = None) -> str:
        """
        Allocate the next invoice number for a tenant.

        Must run inside the transaction that inserts the invoice, so a
        rollback also rolls the counter back.
        """
        sequence = await self._invoice_store.next_invoice_sequence(tenant_id, tx=tx)
        number = format_invoice_number(tenant_id, self._today().year, sequence)
        logger.debug("invoice_number_allocated", tenant_id=tenant_id, number=number)
        return number
