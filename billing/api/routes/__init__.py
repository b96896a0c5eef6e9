"""API route modules."""

from billing.api.routes.health import router as health_router
from billing.api.routes.invoices import router as invoices_router
from billing.api.routes.products import router as products_router
from billing.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "invoices_router",
    "products_router",
    "reports_router",
]
