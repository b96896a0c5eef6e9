"""Core interfaces (ports) for dependency injection."""

from billing.core.interfaces.exporters import IInvoicePdfRenderer, IReportExporter
from billing.core.interfaces.invoice_store import IInvoiceStore
from billing.core.interfaces.product_store import IProductStore
from billing.core.interfaces.transaction import ITransactionManager, Transaction

__all__ = [
    "IInvoicePdfRenderer",
    "IInvoiceStore",
    "IProductStore",
    "IReportExporter",
    "ITransactionManager",
    "Transaction",
]
