"""SQLite implementation of the product catalog store."""

from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

from billing.config import get_logger
from billing.core.entities.product import Product, UnitType
from billing.core.exceptions import ProductInUseError, ValidationError
from billing.core.interfaces.product_store import IProductStore
from billing.core.interfaces.transaction import Transaction
from billing.infrastructure.storage.sqlite.connection import use_connection

logger = get_logger(__name__)


def _dec(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    async def create_product(
        self, product: Product, tx: Transaction | None = None
    ) -> Product:
        now = datetime.now(UTC)
        product.created_at = now
        product.updated_at = now
        async with use_connection(tx, write=True) as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        tenant_id, code, name, description, price, mrp,
                        quantity, min_stock_level, category, unit, active,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.tenant_id,
                        product.code,
                        product.name,
                        product.description,
                        _dec(product.price),
                        _dec(product.mrp),
                        _dec(product.quantity),
                        product.min_stock_level,
                        product.category,
                        product.unit.value,
                        int(product.active),
                        product.created_at.isoformat(),
                        product.updated_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise ValidationError("code", "already exists", product.code) from e
            product.id = cursor.lastrowid
            logger.info(
                "product_created",
                product_id=product.id,
                tenant_id=product.tenant_id,
                code=product.code,
            )
            return product

    async def get_product(
        self, product_id: int, tx: Transaction | None = None
    ) -> Product | None:
        async with use_connection(tx) as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def get_product_by_code(
        self, code: str, tenant_id: int, tx: Transaction | None = None
    ) -> Product | None:
        async with use_connection(tx) as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE tenant_id = ? AND code = ?",
                (tenant_id, code),
            )
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def update_product(
        self, product: Product, tx: Transaction | None = None
    ) -> Product:
        product.updated_at = datetime.now(UTC)
        async with use_connection(tx, write=True) as conn:
            await conn.execute(
                """
                UPDATE products SET
                    name = ?, description = ?, price = ?, mrp = ?,
                    quantity = ?, min_stock_level = ?, category = ?,
                    unit = ?, active = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    product.name,
                    product.description,
                    _dec(product.price),
                    _dec(product.mrp),
                    _dec(product.quantity),
                    product.min_stock_level,
                    product.category,
                    product.unit.value,
                    int(product.active),
                    product.updated_at.isoformat(),
                    product.id,
                ),
            )
            logger.info("product_updated", product_id=product.id)
            return product

    async def update_stock(
        self, product_id: int, quantity: Decimal, tx: Transaction | None = None
    ) -> None:
        async with use_connection(tx, write=True) as conn:
            await conn.execute(
                "UPDATE products SET quantity = ?, updated_at = ? WHERE id = ?",
                (str(quantity), datetime.now(UTC).isoformat(), product_id),
            )

    async def delete_product(
        self, product_id: int, tx: Transaction | None = None
    ) -> None:
        async with use_connection(tx, write=True) as conn:
            try:
                await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            except aiosqlite.IntegrityError as e:
                raise ProductInUseError(product_id) from e
            logger.info("product_deleted", product_id=product_id)

    async def list_products(
        self,
        tenant_id: int,
        active_only: bool = True,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        query = "SELECT * FROM products WHERE tenant_id = ?"
        if active_only:
            query += " AND active = 1"
        query += " ORDER BY name, id LIMIT ? OFFSET ?"
        async with use_connection() as conn:
            cursor = await conn.execute(query, (tenant_id, limit, offset))
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def search_products(
        self, tenant_id: int, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        pattern = f"%{keyword.lower()}%"
        async with use_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM products
                WHERE tenant_id = ?
                  AND (LOWER(name) LIKE ?
                       OR LOWER(code) LIKE ?
                       OR LOWER(COALESCE(description, '')) LIKE ?)
                ORDER BY name, id
                LIMIT ? OFFSET ?
                """,
                (tenant_id, pattern, pattern, pattern, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_by_category(self, tenant_id: int, category: str) -> list[Product]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM products
                WHERE tenant_id = ? AND category = ?
                ORDER BY name, id
                """,
                (tenant_id, category),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_categories(self, tenant_id: int) -> list[str]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT DISTINCT category FROM products
                WHERE tenant_id = ? AND category IS NOT NULL AND category != ''
                ORDER BY category
                """,
                (tenant_id,),
            )
            rows = await cursor.fetchall()
            return [row["category"] for row in rows]

    async def list_low_stock(self, tenant_id: int) -> list[Product]:
        # Quantities are decimal TEXT, so the threshold is compared in Python
        products = await self._list_all(tenant_id)
        return [p for p in products if p.active and p.is_low_stock]

    async def _list_all(self, tenant_id: int) -> list[Product]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE tenant_id = ? ORDER BY name, id",
                (tenant_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            tenant_id=row["tenant_id"],
            code=row["code"],
            name=row["name"],
            description=row["description"],
            price=Decimal(row["price"]),
            mrp=Decimal(row["mrp"]) if row["mrp"] is not None else None,
            quantity=Decimal(row["quantity"]),
            min_stock_level=row["min_stock_level"],
            category=row["category"],
            unit=UnitType(row["unit"]),
            active=bool(row["active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
