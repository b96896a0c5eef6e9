"""
Service factory functions for dependency injection.

Wires store implementations into the core services. Use cases import
from here instead of constructing services themselves.
"""

from collections.abc import Callable
from datetime import date

from billing.core.interfaces import IInvoiceStore, IProductStore
from billing.core.services import (
    InvoiceNumberGenerator,
    ReportAggregator,
    StockReconciler,
)

_report_aggregator: ReportAggregator | None = None


def get_stock_reconciler(product_store: IProductStore) -> StockReconciler:
    return StockReconciler(product_store)


def get_invoice_number_generator(
    invoice_store: IInvoiceStore,
    today: Callable[[], date] = date.today,
) -> InvoiceNumberGenerator:
    return InvoiceNumberGenerator(invoice_store, today=today)


def get_report_aggregator() -> ReportAggregator:
    """Get or create the stateless report aggregator."""
    global _report_aggregator
    if _report_aggregator is None:
        _report_aggregator = ReportAggregator()
    return _report_aggregator
