"""Core domain entities."""

from billing.core.entities.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
)
from billing.core.entities.product import (
    Product,
    UnitType,
)
from billing.core.entities.report import (
    MonthlyRevenue,
    Report,
    ReportSummary,
    SalesTrendPoint,
    StatusCount,
    TopProduct,
)
from billing.core.entities.tenant import TenantContext

__all__ = [
    # Product
    "Product",
    "UnitType",
    # Invoice
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    # Report
    "MonthlyRevenue",
    "Report",
    "ReportSummary",
    "SalesTrendPoint",
    "StatusCount",
    "TopProduct",
    # Tenant
    "TenantContext",
]
