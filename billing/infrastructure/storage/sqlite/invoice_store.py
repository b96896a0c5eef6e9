"""SQLite implementation of invoice storage."""

from datetime import UTC, date, datetime
from decimal import Decimal

import aiosqlite

from billing.config import get_logger
from billing.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billing.core.entities.product import UnitType
from billing.core.exceptions import DuplicateInvoiceNumberError
from billing.core.interfaces.invoice_store import IInvoiceStore
from billing.core.interfaces.transaction import Transaction
from billing.infrastructure.storage.sqlite.connection import use_connection

logger = get_logger(__name__)

_ITEM_SELECT = """
    SELECT ii.*, p.name AS product_name, p.code AS product_code,
           p.unit AS product_unit, p.mrp AS product_mrp
    FROM invoice_items ii
    JOIN products p ON p.id = ii.product_id
"""


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice and line item storage."""

    async def create_invoice(
        self, invoice: Invoice, tx: Transaction | None = None
    ) -> Invoice:
        """Insert invoice header and items in one unit of work."""
        now = datetime.now(UTC)
        invoice.created_at = now
        invoice.updated_at = now
        invoice.calculate_totals()

        async with use_connection(tx, write=True) as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO invoices (
                        tenant_id, invoice_number, invoice_date, due_date,
                        customer_name, customer_email, customer_phone, customer_address,
                        subtotal, tax_amount, discount_amount, total_amount,
                        status, notes, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        invoice.tenant_id,
                        invoice.invoice_number,
                        invoice.invoice_date.isoformat(),
                        invoice.due_date.isoformat() if invoice.due_date else None,
                        invoice.customer_name,
                        invoice.customer_email,
                        invoice.customer_phone,
                        invoice.customer_address,
                        str(invoice.subtotal),
                        str(invoice.tax_amount),
                        str(invoice.discount_amount),
                        str(invoice.total_amount),
                        invoice.status.value,
                        invoice.notes,
                        invoice.created_at.isoformat(),
                        invoice.updated_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateInvoiceNumberError(
                        invoice.invoice_number or "", invoice.tenant_id
                    ) from e
                raise
            invoice.id = cursor.lastrowid
            await self._insert_items(conn, invoice)

            logger.info(
                "invoice_created",
                invoice_id=invoice.id,
                tenant_id=invoice.tenant_id,
                invoice_number=invoice.invoice_number,
                items=len(invoice.items),
            )
            return invoice

    async def get_invoice(
        self, invoice_id: int, tx: Transaction | None = None
    ) -> Invoice | None:
        async with use_connection(tx) as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE id = ?", (invoice_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            invoices = await self._with_items(conn, [row])
            return invoices[0]

    async def update_invoice(
        self, invoice: Invoice, tx: Transaction | None = None
    ) -> Invoice:
        """Update header fields and replace the stored item list."""
        invoice.updated_at = datetime.now(UTC)
        invoice.calculate_totals()

        async with use_connection(tx, write=True) as conn:
            await conn.execute(
                """
                UPDATE invoices SET
                    invoice_date = ?, due_date = ?,
                    customer_name = ?, customer_email = ?,
                    customer_phone = ?, customer_address = ?,
                    subtotal = ?, tax_amount = ?, discount_amount = ?,
                    total_amount = ?, status = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    invoice.invoice_date.isoformat(),
                    invoice.due_date.isoformat() if invoice.due_date else None,
                    invoice.customer_name,
                    invoice.customer_email,
                    invoice.customer_phone,
                    invoice.customer_address,
                    str(invoice.subtotal),
                    str(invoice.tax_amount),
                    str(invoice.discount_amount),
                    str(invoice.total_amount),
                    invoice.status.value,
                    invoice.notes,
                    invoice.updated_at.isoformat(),
                    invoice.id,
                ),
            )
            await conn.execute(
                "DELETE FROM invoice_items WHERE invoice_id = ?", (invoice.id,)
            )
            await self._insert_items(conn, invoice)

            logger.info("invoice_updated", invoice_id=invoice.id, items=len(invoice.items))
            return invoice

    async def update_status(
        self, invoice_id: int, status: InvoiceStatus, tx: Transaction | None = None
    ) -> None:
        async with use_connection(tx, write=True) as conn:
            await conn.execute(
                "UPDATE invoices SET status = ?, updated_at = ? WHERE id = ?",
                (status.value, datetime.now(UTC).isoformat(), invoice_id),
            )
            logger.info("invoice_status_updated", invoice_id=invoice_id, status=status.value)

    async def delete_invoice(
        self, invoice_id: int, tx: Transaction | None = None
    ) -> None:
        async with use_connection(tx, write=True) as conn:
            await conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
            logger.info("invoice_deleted", invoice_id=invoice_id)

    async def next_invoice_sequence(
        self, tenant_id: int, tx: Transaction | None = None
    ) -> int:
        """
        Increment and return the tenant's invoice counter.

        The counter is seeded from the tenant's invoice count on first use
        and never decreases, so deleted invoices never free their numbers.
        """
        async with use_connection(tx, write=True) as conn:
            cursor = await conn.execute(
                """
                INSERT INTO invoice_sequences (tenant_id, last_value)
                VALUES (?, (SELECT COUNT(*) FROM invoices WHERE tenant_id = ?) + 1)
                ON CONFLICT(tenant_id) DO UPDATE SET last_value = last_value + 1
                RETURNING last_value
                """,
                (tenant_id, tenant_id),
            )
            row = await cursor.fetchone()
            await cursor.close()
            return int(row[0])

    async def count_invoices(self, tenant_id: int) -> int:
        async with use_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM invoices WHERE tenant_id = ?", (tenant_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def list_invoices(
        self, tenant_id: int, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        return await self._query(
            """
            SELECT * FROM invoices WHERE tenant_id = ?
            ORDER BY invoice_date DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            (tenant_id, limit, offset),
        )

    async def search_invoices(
        self, tenant_id: int, keyword: str, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        pattern = f"%{keyword.lower()}%"
        return await self._query(
            """
            SELECT * FROM invoices
            WHERE tenant_id = ?
              AND (LOWER(COALESCE(customer_name, '')) LIKE ?
                   OR LOWER(invoice_number) LIKE ?)
            ORDER BY invoice_date DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            (tenant_id, pattern, pattern, limit, offset),
        )

    async def list_by_status(
        self, tenant_id: int, status: InvoiceStatus
    ) -> list[Invoice]:
        return await self._query(
            """
            SELECT * FROM invoices WHERE tenant_id = ? AND status = ?
            ORDER BY invoice_date DESC, id DESC
            """,
            (tenant_id, status.value),
        )

    async def list_overdue(self, tenant_id: int, today: date) -> list[Invoice]:
        return await self._query(
            """
            SELECT * FROM invoices
            WHERE tenant_id = ? AND status = ?
              AND due_date IS NOT NULL AND due_date < ?
            ORDER BY due_date, id
            """,
            (tenant_id, InvoiceStatus.SENT.value, today.isoformat()),
        )

    async def list_in_date_range(
        self,
        tenant_id: int,
        start_date: date,
        end_date: date,
        status: InvoiceStatus | None = None,
    ) -> list[Invoice]:
        query = """
            SELECT * FROM invoices
            WHERE tenant_id = ? AND invoice_date BETWEEN ? AND ?
        """
        params: list = [tenant_id, start_date.isoformat(), end_date.isoformat()]
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        query += " ORDER BY invoice_date, id"
        return await self._query(query, tuple(params))

    async def _query(self, sql: str, params: tuple) -> list[Invoice]:
        async with use_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return await self._with_items(conn, rows)

    async def _insert_items(self, conn: aiosqlite.Connection, invoice: Invoice) -> None:
        for line_number, item in enumerate(invoice.items, start=1):
            item.invoice_id = invoice.id
            cursor = await conn.execute(
                """
                INSERT INTO invoice_items (
                    invoice_id, product_id, line_number, quantity, unit_price, description
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    invoice.id,
                    item.product_id,
                    line_number,
                    str(item.quantity),
                    str(item.unit_price),
                    item.description,
                ),
            )
            item.id = cursor.lastrowid

    async def _with_items(
        self, conn: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[Invoice]:
        """Build invoices from header rows, loading all their items in one query."""
        if not rows:
            return []

        ids = [row["id"] for row in rows]
        placeholders = ", ".join("?" for _ in ids)
        cursor = await conn.execute(
            f"{_ITEM_SELECT} WHERE ii.invoice_id IN ({placeholders}) "
            "ORDER BY ii.invoice_id, ii.line_number",
            ids,
        )
        items_by_invoice: dict[int, list[InvoiceItem]] = {i: [] for i in ids}
        for item_row in await cursor.fetchall():
            items_by_invoice[item_row["invoice_id"]].append(self._row_to_item(item_row))

        return [self._row_to_invoice(row, items_by_invoice[row["id"]]) for row in rows]

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[InvoiceItem]) -> Invoice:
        """Convert database row to Invoice entity."""
        return Invoice(
            id=row["id"],
            tenant_id=row["tenant_id"],
            invoice_number=row["invoice_number"],
            invoice_date=date.fromisoformat(row["invoice_date"]),
            due_date=date.fromisoformat(row["due_date"]) if row["due_date"] else None,
            customer_name=row["customer_name"],
            customer_email=row["customer_email"],
            customer_phone=row["customer_phone"],
            customer_address=row["customer_address"],
            tax_amount=Decimal(row["tax_amount"]),
            discount_amount=Decimal(row["discount_amount"]),
            status=InvoiceStatus(row["status"]),
            notes=row["notes"],
            items=items,
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InvoiceItem:
        """Convert a joined item row to an InvoiceItem with product snapshot."""
        return InvoiceItem(
            id=row["id"],
            invoice_id=row["invoice_id"],
            product_id=row["product_id"],
            quantity=Decimal(row["quantity"]),
            unit_price=Decimal(row["unit_price"]),
            description=row["description"],
            product_name=row["product_name"],
            product_code=row["product_code"],
            product_unit=UnitType(row["product_unit"]),
            product_mrp=Decimal(row["product_mrp"]) if row["product_mrp"] is not None else None,
        )
