"""
Core business logic services.

Layer-pure services that depend only on:
- billing/core/entities/*
- billing/core/interfaces/*
- billing/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from billing.core.services.invoice_numbering import (
    InvoiceNumberGenerator,
    format_invoice_number,
)
from billing.core.services.report_aggregator import ReportAggregator
from billing.core.services.stock_reconciler import StockReconciler

__all__ = [
    "InvoiceNumberGenerator",
    "format_invoice_number",
    "ReportAggregator",
    "StockReconciler",
]
