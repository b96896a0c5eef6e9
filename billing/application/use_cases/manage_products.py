"""
Catalog use cases for a tenant's products.

Product codes are assigned on creation by scanning ``PRD000001``,
``PRD000002``, ... and taking the first code the tenant does not already
use. Creation runs inside a write transaction so two concurrent creates
for the same tenant can not pick the same code.
"""

from billing.application.dto.requests import ProductRequest
from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger
from billing.core.entities.product import Product, UnitType
from billing.core.entities.tenant import TenantContext
from billing.core.interfaces import IProductStore, Transaction

logger = get_logger(__name__)

PRODUCT_CODE_PREFIX = "PRD"


async def generate_product_code(
    product_store: IProductStore, tenant_id: int, tx: Transaction | None = None
) -> str:
    """Return the first free ``PRD{n:06d}`` code for a tenant."""
    counter = 1
    while True:
        code = f"{PRODUCT_CODE_PREFIX}{counter:06d}"
        if await product_store.get_product_by_code(code, tenant_id, tx=tx) is None:
            return code
        counter += 1


class ManageProductsUseCase(BillingUseCase):
    """Create, update, delete and query catalog products."""

    async def create_product(
        self, tenant: TenantContext, request: ProductRequest
    ) -> Product:
        store = await self._get_product_store()
        tx_manager = await self._get_transaction_manager()

        async with tx_manager.transaction() as tx:
            product = await self.create_in_transaction(
                store,
                Product(tenant_id=tenant.tenant_id, **request.model_dump()),
                tx,
            )
        logger.info(
            "product_created",
            tenant_id=tenant.tenant_id,
            product_id=product.id,
            code=product.code,
        )
        return product

    @staticmethod
    async def create_in_transaction(
        store: IProductStore, product: Product, tx: Transaction
    ) -> Product:
        """Assign a fresh code to *product* and insert it inside *tx*."""
        product.code = await generate_product_code(store, product.tenant_id, tx=tx)
        return await store.create_product(product, tx=tx)

    async def update_product(
        self, tenant: TenantContext, product_id: int, request: ProductRequest
    ) -> Product:
        """Overwrite mutable fields; code and owner never change."""
        store = await self._get_product_store()
        tx_manager = await self._get_transaction_manager()

        async with tx_manager.transaction() as tx:
            product = await self._require_product(tenant, product_id, tx)
            updated = product.model_copy(update=request.model_dump())
            product = await store.update_product(updated, tx=tx)
        logger.info("product_updated", tenant_id=tenant.tenant_id, product_id=product_id)
        return product

    async def delete_product(self, tenant: TenantContext, product_id: int) -> None:
        """Delete an owned product; refused while invoice items reference it."""
        store = await self._get_product_store()
        tx_manager = await self._get_transaction_manager()

        async with tx_manager.transaction() as tx:
            product = await self._require_product(tenant, product_id, tx)
            await store.delete_product(product_id, tx=tx)

        logger.info(
            "product_removed",
            tenant_id=tenant.tenant_id,
            product_id=product_id,
            code=product.code,
        )

    async def get_product(self, tenant: TenantContext, product_id: int) -> Product:
        return await self._require_product(tenant, product_id)

    async def list_products(
        self, tenant: TenantContext, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        store = await self._get_product_store()
        return await store.list_products(
            tenant.tenant_id, active_only=True, limit=limit, offset=offset
        )

    async def search_products(
        self, tenant: TenantContext, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        store = await self._get_product_store()
        keyword = keyword.strip()
        if not keyword:
            return await store.list_products(tenant.tenant_id, limit=limit, offset=offset)
        return await store.search_products(
            tenant.tenant_id, keyword, limit=limit, offset=offset
        )

    async def list_by_category(
        self, tenant: TenantContext, category: str
    ) -> list[Product]:
        store = await self._get_product_store()
        return await store.list_by_category(tenant.tenant_id, category)

    async def list_categories(self, tenant: TenantContext) -> list[str]:
        store = await self._get_product_store()
        return await store.list_categories(tenant.tenant_id)

    async def list_low_stock(self, tenant: TenantContext) -> list[Product]:
        store = await self._get_product_store()
        return await store.list_low_stock(tenant.tenant_id)

    @staticmethod
    def list_unit_types() -> list[UnitType]:
        return list(UnitType)
