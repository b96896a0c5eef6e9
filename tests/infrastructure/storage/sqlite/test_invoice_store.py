"""Tests for SQLite invoice store."""

from datetime import date
from decimal import Decimal

import pytest

from billing.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billing.core.entities.product import Product, UnitType
from billing.core.exceptions import DuplicateInvoiceNumberError, ProductInUseError
from billing.infrastructure.storage.sqlite import SQLiteInvoiceStore, SQLiteProductStore


@pytest.fixture
async def stores(migrated_db):
    products = SQLiteProductStore()
    product = await products.create_product(
        Product(
            tenant_id=1,
            code="PRD000001",
            name="Ghee",
            price=Decimal("500"),
            mrp=Decimal("550"),
            unit=UnitType.LITERS,
        )
    )
    return SQLiteInvoiceStore(), products, product


def _invoice(
    product_id: int,
    number: str,
    *,
    tenant_id: int = 1,
    invoice_date: date = date(2024, 3, 15),
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    due_date: date | None = None,
    customer_name: str = "Ravi Stores",
) -> Invoice:
    return Invoice(
        tenant_id=tenant_id,
        invoice_number=number,
        invoice_date=invoice_date,
        due_date=due_date,
        status=status,
        customer_name=customer_name,
        tax_amount=Decimal("5"),
        items=[
            InvoiceItem(
                product_id=product_id,
                quantity=Decimal("1.5"),
                unit_price=Decimal("480"),
                description="Ghee 1L",
            ),
            InvoiceItem(product_id=product_id, quantity=Decimal("1"), unit_price=Decimal("500")),
        ],
    )


class TestSQLiteInvoiceStore:
    async def test_create_and_get_with_snapshot(self, stores):
        invoices, _, product = stores
        created = await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))

        fetched = await invoices.get_invoice(created.id)

        assert fetched.invoice_number == "INV-1-2024-000001"
        assert [i.quantity for i in fetched.items] == [Decimal("1.5"), Decimal("1")]
        assert fetched.items[0].product_name == "Ghee"
        assert fetched.items[0].product_code == "PRD000001"
        assert fetched.items[0].product_unit == UnitType.LITERS
        assert fetched.items[0].product_mrp == Decimal("550")
        assert fetched.subtotal == Decimal("1220.0")
        assert fetched.total_amount == Decimal("1225.0")

    async def test_get_missing(self, stores):
        invoices, _, _ = stores
        assert await invoices.get_invoice(999) is None

    async def test_duplicate_number_rejected(self, stores):
        invoices, _, product = stores
        await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))
        with pytest.raises(DuplicateInvoiceNumberError):
            await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))

    async def test_update_replaces_items(self, stores):
        invoices, _, product = stores
        created = await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))

        created.clear_items()
        created.add_item(InvoiceItem(product_id=product.id, quantity=Decimal("3"), unit_price=Decimal("1")))
        created.customer_name = "Changed"
        await invoices.update_invoice(created)

        fetched = await invoices.get_invoice(created.id)
        assert fetched.customer_name == "Changed"
        assert len(fetched.items) == 1
        assert fetched.subtotal == Decimal("3")

    async def test_update_status(self, stores):
        invoices, _, product = stores
        created = await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))
        await invoices.update_status(created.id, InvoiceStatus.PAID)
        assert (await invoices.get_invoice(created.id)).status == InvoiceStatus.PAID

    async def test_delete_cascades_items(self, stores):
        invoices, products, product = stores
        created = await invoices.create_invoice(_invoice(product.id, "INV-1-2024-000001"))

        with pytest.raises(ProductInUseError):
            await products.delete_product(product.id)

        await invoices.delete_invoice(created.id)
        assert await invoices.get_invoice(created.id) is None
        await products.delete_product(product.id)
        assert await products.get_product(product.id) is None

    async def test_sequence_is_per_tenant_and_monotonic(self, stores):
        invoices, _, product = stores
        assert await invoices.next_invoice_sequence(1) == 1
        assert await invoices.next_invoice_sequence(1) == 2
        assert await invoices.next_invoice_sequence(2) == 1

    async def test_sequence_seeded_from_existing_invoices(self, stores):
        invoices, _, product = stores
        await invoices.create_invoice(_invoice(product.id, "LEGACY-1"))
        await invoices.create_invoice(_invoice(product.id, "LEGACY-2"))
        assert await invoices.next_invoice_sequence(1) == 3

    async def test_sequence_not_reused_after_delete(self, stores):
        invoices, _, product = stores
        seq = await invoices.next_invoice_sequence(1)
        created = await invoices.create_invoice(_invoice(product.id, f"INV-1-2024-{seq:06d}"))
        await invoices.delete_invoice(created.id)
        assert await invoices.next_invoice_sequence(1) == 2

    async def test_queries_scoped_to_tenant(self, stores):
        invoices, _, product = stores
        await invoices.create_invoice(
            _invoice(product.id, "A-1", invoice_date=date(2024, 3, 1), customer_name="Ravi Stores")
        )
        await invoices.create_invoice(
            _invoice(product.id, "A-2", invoice_date=date(2024, 3, 9), status=InvoiceStatus.PAID)
        )
        await invoices.create_invoice(_invoice(product.id, "B-1", tenant_id=2))

        assert [i.invoice_number for i in await invoices.list_invoices(1)] == ["A-2", "A-1"]
        assert await invoices.count_invoices(1) == 2
        assert [i.invoice_number for i in await invoices.search_invoices(1, "RAVI")] == ["A-2", "A-1"]
        assert [i.invoice_number for i in await invoices.search_invoices(1, "a-2")] == ["A-2"]
        assert [i.invoice_number for i in await invoices.list_by_status(1, InvoiceStatus.PAID)] == ["A-2"]

    async def test_list_in_date_range_inclusive(self, stores):
        invoices, _, product = stores
        for number, day in (("A-1", 1), ("A-2", 15), ("A-3", 31)):
            await invoices.create_invoice(
                _invoice(product.id, number, invoice_date=date(2024, 3, day))
            )

        in_range = await invoices.list_in_date_range(1, date(2024, 3, 1), date(2024, 3, 15))
        assert [i.invoice_number for i in in_range] == ["A-1", "A-2"]

        paid = await invoices.list_in_date_range(
            1, date(2024, 3, 1), date(2024, 3, 31), status=InvoiceStatus.PAID
        )
        assert paid == []

    async def test_list_overdue(self, stores):
        invoices, _, product = stores
        await invoices.create_invoice(
            _invoice(product.id, "A-1", status=InvoiceStatus.SENT, due_date=date(2024, 4, 1))
        )
        await invoices.create_invoice(
            _invoice(product.id, "A-2", status=InvoiceStatus.SENT, due_date=date(2024, 4, 2))
        )
        await invoices.create_invoice(
            _invoice(product.id, "A-3", status=InvoiceStatus.DRAFT, due_date=date(2024, 1, 1))
        )

        overdue = await invoices.list_overdue(1, date(2024, 4, 2))
        assert [i.invoice_number for i in overdue] == ["A-1"]
