"""Tests for ManageProductsUseCase and product code generation."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from billing.application.dto.requests import ProductRequest
from billing.application.use_cases import ManageProductsUseCase, generate_product_code
from billing.core.entities.product import UnitType
from billing.core.exceptions import PermissionDeniedError, ProductInUseError


@pytest.fixture
def use_case(product_store, tx_manager):
    product_store.get_product_by_code.return_value = None

    async def create_product(product, tx=None):
        product.id = 50
        return product

    async def update_product(product, tx=None):
        return product

    product_store.create_product.side_effect = create_product
    product_store.update_product.side_effect = update_product
    return ManageProductsUseCase(product_store=product_store, transaction_manager=tx_manager)


class TestGenerateProductCode:
    async def test_first_code(self):
        store = AsyncMock()
        store.get_product_by_code.return_value = None
        assert await generate_product_code(store, 1) == "PRD000001"

    async def test_skips_used_codes(self, product_factory):
        store = AsyncMock()
        taken = {"PRD000001", "PRD000002"}

        async def by_code(code, tenant_id, tx=None):
            return product_factory() if code in taken else None

        store.get_product_by_code.side_effect = by_code
        assert await generate_product_code(store, 1) == "PRD000003"


class TestManageProductsUseCase:
    async def test_create_assigns_code_and_tenant(self, use_case, tenant, tx_manager):
        request = ProductRequest(name="Jaggery", price=Decimal("60"), unit="kg")

        product = await use_case.create_product(tenant, request)

        assert product.id == 50
        assert product.code == "PRD000001"
        assert product.tenant_id == 1
        assert product.unit == UnitType.KILOGRAMS
        assert tx_manager.opened == 1

    async def test_update_keeps_code_and_owner(self, use_case, tenant, product_store):
        request = ProductRequest(name="Brown Rice", price=Decimal("30"), quantity=Decimal("4"))

        product = await use_case.update_product(tenant, 1, request)

        assert product.name == "Brown Rice"
        assert product.code == "PRD000001"
        assert product.tenant_id == 1
        assert product.quantity == Decimal("4")

    async def test_update_foreign_product_denied(self, use_case, other_tenant, product_store):
        request = ProductRequest(name="X", price=Decimal("1"))
        with pytest.raises(PermissionDeniedError):
            await use_case.update_product(other_tenant, 1, request)
        product_store.update_product.assert_not_awaited()

    async def test_delete_in_use_propagates(self, use_case, tenant, product_store):
        product_store.delete_product.side_effect = ProductInUseError(1)
        with pytest.raises(ProductInUseError):
            await use_case.delete_product(tenant, 1)

    async def test_delete_foreign_product_denied(self, use_case, other_tenant, product_store):
        with pytest.raises(PermissionDeniedError):
            await use_case.delete_product(other_tenant, 1)
        product_store.delete_product.assert_not_awaited()

    async def test_blank_search_lists_all(self, use_case, tenant, product_store):
        product_store.list_products.return_value = []
        await use_case.search_products(tenant, "")
        product_store.search_products.assert_not_awaited()

    async def test_list_active_only(self, use_case, tenant, product_store):
        product_store.list_products.return_value = []
        await use_case.list_products(tenant)
        product_store.list_products.assert_awaited_once_with(
            1, active_only=True, limit=100, offset=0
        )

    def test_unit_types(self):
        assert ManageProductsUseCase.list_unit_types() == list(UnitType)
