"""Fixtures for API tests: an app with use cases wired to in-memory fakes."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from billing.api import dependencies as deps
from billing.api.main import create_app
from billing.application.use_cases import (
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    ManageProductsUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceStatusUseCase,
    UpdateInvoiceUseCase,
)


@pytest.fixture
def app(product_store, invoice_store, tx_manager):
    """Application whose use cases run against the fake stores."""
    application = create_app()
    stores = {
        "product_store": product_store,
        "invoice_store": invoice_store,
        "transaction_manager": tx_manager,
    }
    application.dependency_overrides.update(
        {
            deps.get_create_invoice_use_case: lambda: CreateInvoiceUseCase(
                **stores, today=lambda: date(2024, 3, 15)
            ),
            deps.get_update_invoice_use_case: lambda: UpdateInvoiceUseCase(**stores),
            deps.get_delete_invoice_use_case: lambda: DeleteInvoiceUseCase(**stores),
            deps.get_update_invoice_status_use_case: lambda: UpdateInvoiceStatusUseCase(
                **stores
            ),
            deps.get_query_invoices_use_case: lambda: QueryInvoicesUseCase(
                invoice_store=invoice_store
            ),
            deps.get_manage_products_use_case: lambda: ManageProductsUseCase(**stores),
        }
    )
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def headers() -> dict[str, str]:
    return {"X-Tenant-ID": "1", "X-Username": "owner"}
