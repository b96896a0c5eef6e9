"""Tests for SQLite product store."""

from decimal import Decimal

import pytest

from billing.core.entities.product import Product, UnitType
from billing.core.exceptions import ValidationError
from billing.infrastructure.storage.sqlite import SQLiteProductStore


def _product(code: str, name: str, tenant_id: int = 1, **kwargs) -> Product:
    return Product(
        tenant_id=tenant_id, code=code, name=name, price=Decimal("10.50"), **kwargs
    )


@pytest.fixture
async def store(migrated_db):
    return SQLiteProductStore()


class TestSQLiteProductStore:
    async def test_create_and_get_round_trip(self, store):
        created = await store.create_product(
            _product(
                "PRD000001",
                "Sugar",
                mrp=Decimal("12.00"),
                quantity=Decimal("2.750"),
                unit=UnitType.KILOGRAMS,
                category="Grocery",
            )
        )
        fetched = await store.get_product(created.id)

        assert fetched.code == "PRD000001"
        assert fetched.price == Decimal("10.50")
        assert fetched.quantity == Decimal("2.750")
        assert fetched.unit == UnitType.KILOGRAMS
        assert fetched.category == "Grocery"

    async def test_duplicate_code_per_tenant_rejected(self, store):
        await store.create_product(_product("PRD000001", "A"))
        with pytest.raises(ValidationError):
            await store.create_product(_product("PRD000001", "B"))

    async def test_same_code_allowed_for_other_tenant(self, store):
        await store.create_product(_product("PRD000001", "A", tenant_id=1))
        other = await store.create_product(_product("PRD000001", "A", tenant_id=2))
        assert other.id is not None

    async def test_get_by_code_scoped_to_tenant(self, store):
        await store.create_product(_product("PRD000001", "A", tenant_id=1))
        assert await store.get_product_by_code("PRD000001", 2) is None
        assert (await store.get_product_by_code("PRD000001", 1)).name == "A"

    async def test_update_stock(self, store):
        created = await store.create_product(_product("PRD000001", "A"))
        await store.update_stock(created.id, Decimal("-3"))
        assert (await store.get_product(created.id)).quantity == Decimal("-3")

    async def test_update_product(self, store):
        created = await store.create_product(_product("PRD000001", "A"))
        created.name = "Renamed"
        created.active = False
        await store.update_product(created)

        fetched = await store.get_product(created.id)
        assert fetched.name == "Renamed"
        assert fetched.active is False

    async def test_list_orders_by_name_and_hides_inactive(self, store):
        await store.create_product(_product("PRD000001", "Zeera"))
        await store.create_product(_product("PRD000002", "Atta"))
        await store.create_product(_product("PRD000003", "Old", active=False))
        await store.create_product(_product("PRD000001", "Foreign", tenant_id=2))

        names = [p.name for p in await store.list_products(1)]
        assert names == ["Atta", "Zeera"]
        assert len(await store.list_products(1, active_only=False)) == 3

    async def test_search_case_insensitive(self, store):
        await store.create_product(_product("PRD000001", "Basmati Rice"))
        await store.create_product(_product("PRD000002", "Salt", description="Rock salt"))

        assert [p.name for p in await store.search_products(1, "RICE")] == ["Basmati Rice"]
        assert [p.name for p in await store.search_products(1, "rock")] == ["Salt"]
        assert [p.name for p in await store.search_products(1, "prd000001")] == ["Basmati Rice"]

    async def test_categories(self, store):
        await store.create_product(_product("PRD000001", "A", category="Dairy"))
        await store.create_product(_product("PRD000002", "B", category="Bakery"))
        await store.create_product(_product("PRD000003", "C", category="Dairy"))

        assert await store.list_categories(1) == ["Bakery", "Dairy"]
        assert [p.name for p in await store.list_by_category(1, "Dairy")] == ["A", "C"]

    async def test_low_stock(self, store):
        await store.create_product(
            _product("PRD000001", "Low", quantity=Decimal("2"), min_stock_level=2)
        )
        await store.create_product(
            _product("PRD000002", "Fine", quantity=Decimal("10"), min_stock_level=2)
        )
        await store.create_product(
            _product("PRD000003", "Inactive", quantity=Decimal("0"), active=False)
        )

        assert [p.name for p in await store.list_low_stock(1)] == ["Low"]
