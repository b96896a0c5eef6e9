"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import billing.infrastructure.storage.sqlite.connection as conn_module
from billing.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billing.core.entities.product import Product, UnitType
from billing.core.entities.tenant import TenantContext
from billing.infrastructure.storage.sqlite.migrations import initialize_database


class FakeTransactionManager:
    """Transaction manager whose transaction is a sentinel object."""

    def __init__(self):
        self.tx = MagicMock(name="tx")
        self.opened = 0

    @asynccontextmanager
    async def _transaction(self):
        self.opened += 1
        yield self.tx

    def transaction(self):
        return self._transaction()


def make_product(
    product_id: int = 1,
    tenant_id: int = 1,
    *,
    name: str = "Basmati Rice",
    price: str = "20.00",
    mrp: str | None = "25.00",
    quantity: str = "100",
    unit: UnitType = UnitType.PIECES,
    min_stock_level: int = 5,
    code: str | None = None,
    category: str | None = "Grocery",
) -> Product:
    return Product(
        id=product_id,
        tenant_id=tenant_id,
        code=code or f"PRD{product_id:06d}",
        name=name,
        price=Decimal(price),
        mrp=Decimal(mrp) if mrp is not None else None,
        quantity=Decimal(quantity),
        unit=unit,
        min_stock_level=min_stock_level,
        category=category,
    )


def make_invoice(
    invoice_id: int = 1,
    tenant_id: int = 1,
    *,
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    invoice_date: date = date(2024, 3, 15),
    items: list[InvoiceItem] | None = None,
    tax: str = "0",
    discount: str = "0",
    customer_name: str = "Asha Traders",
) -> Invoice:
    if items is None:
        items = [
            InvoiceItem(
                id=1,
                product_id=1,
                quantity=Decimal("2"),
                unit_price=Decimal("20.00"),
                product_name="Basmati Rice",
                product_mrp=Decimal("25.00"),
            )
        ]
    return Invoice(
        id=invoice_id,
        tenant_id=tenant_id,
        invoice_number=f"INV-{tenant_id}-{invoice_date.year}-{invoice_id:06d}",
        invoice_date=invoice_date,
        customer_name=customer_name,
        status=status,
        tax_amount=Decimal(tax),
        discount_amount=Decimal(discount),
        items=items,
    )


@pytest.fixture
def tenant() -> TenantContext:
    return TenantContext(tenant_id=1, username="owner")


@pytest.fixture
def other_tenant() -> TenantContext:
    return TenantContext(tenant_id=2, username="intruder")


@pytest.fixture
def tx_manager() -> FakeTransactionManager:
    return FakeTransactionManager()


@pytest.fixture
def product_store() -> AsyncMock:
    """Product store backed by a dict so stock writes are observable."""
    products = {1: make_product(1), 2: make_product(2, name="Sugar", unit=UnitType.KILOGRAMS)}
    store = AsyncMock()
    store.products = products

    async def get_product(product_id, tx=None):
        product = products.get(product_id)
        return product.model_copy() if product is not None else None

    async def update_stock(product_id, quantity, tx=None):
        products[product_id].quantity = quantity

    store.get_product.side_effect = get_product
    store.update_stock.side_effect = update_stock
    return store


@pytest.fixture
def invoice_store() -> AsyncMock:
    store = AsyncMock()
    store.next_invoice_sequence.return_value = 1

    async def create_invoice(invoice, tx=None):
        invoice.id = 10
        for i, item in enumerate(invoice.items, start=1):
            item.id = i
            item.invoice_id = invoice.id
        return invoice

    async def update_invoice(invoice, tx=None):
        return invoice

    store.create_invoice.side_effect = create_invoice
    store.update_invoice.side_effect = update_invoice
    return store


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def invoice_factory():
    return make_invoice


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def migrated_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temporary database served by the global connection pool."""
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()
