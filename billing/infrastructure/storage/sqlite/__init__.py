"""SQLite storage implementations."""

from billing.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    SQLiteTransactionManager,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    use_connection,
)
from billing.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from billing.infrastructure.storage.sqlite.product_store import SQLiteProductStore

# Singleton instances
_invoice_store: SQLiteInvoiceStore | None = None
_product_store: SQLiteProductStore | None = None
_transaction_manager: SQLiteTransactionManager | None = None


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_transaction_manager() -> SQLiteTransactionManager:
    """Get singleton transaction manager instance."""
    global _transaction_manager
    if _transaction_manager is None:
        _transaction_manager = SQLiteTransactionManager()
    return _transaction_manager


__all__ = [
    # Connection
    "ConnectionPool",
    "SQLiteTransactionManager",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "use_connection",
    # Store classes
    "SQLiteInvoiceStore",
    "SQLiteProductStore",
    # Factory functions
    "get_invoice_store",
    "get_product_store",
    "get_transaction_manager",
]
