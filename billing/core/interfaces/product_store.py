"""Abstract interface for the product catalog store."""

from abc import ABC, abstractmethod
from decimal import Decimal

from billing.core.entities.product import Product
from billing.core.interfaces.transaction import Transaction


class IProductStore(ABC):
    """Interface for product persistence, scoped by tenant where listed."""

    @abstractmethod
    async def create_product(
        self, product: Product, tx: Transaction | None = None
    ) -> Product:
        """Insert a new product and assign its id."""
        pass

    @abstractmethod
    async def get_product(
        self, product_id: int, tx: Transaction | None = None
    ) -> Product | None:
        """Get product by ID regardless of owner."""
        pass

    @abstractmethod
    async def get_product_by_code(
        self, code: str, tenant_id: int, tx: Transaction | None = None
    ) -> Product | None:
        """Get a tenant's product by its code."""
        pass

    @abstractmethod
    async def update_product(
        self, product: Product, tx: Transaction | None = None
    ) -> Product:
        """Update all mutable product fields."""
        pass

    @abstractmethod
    async def update_stock(
        self, product_id: int, quantity: Decimal, tx: Transaction | None = None
    ) -> None:
        """Persist a product's stock quantity."""
        pass

    @abstractmethod
    async def delete_product(
        self, product_id: int, tx: Transaction | None = None
    ) -> None:
        """Delete a product. Raises ProductInUseError if invoices reference it."""
        pass

    @abstractmethod
    async def list_products(
        self,
        tenant_id: int,
        active_only: bool = True,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List a tenant's products with pagination."""
        pass

    @abstractmethod
    async def search_products(
        self, tenant_id: int, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        """Case-insensitive search over name, code and description."""
        pass

    @abstractmethod
    async def list_by_category(self, tenant_id: int, category: str) -> list[Product]:
        """List a tenant's products in a category."""
        pass

    @abstractmethod
    async def list_categories(self, tenant_id: int) -> list[str]:
        """List a tenant's distinct product categories."""
        pass

    @abstractmethod
    async def list_low_stock(self, tenant_id: int) -> list[Product]:
        """List products whose stock is at or below their minimum level."""
        pass
