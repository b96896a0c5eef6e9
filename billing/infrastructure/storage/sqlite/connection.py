"""
aiosqlite connection pool and write transactions.

Connections run in autocommit mode. A write transaction starts with
``BEGIN IMMEDIATE`` so two writers serialize on the database lock before
either reads the rows it is about to change.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path

import aiosqlite

from billing.config import get_logger, get_settings
from billing.core.interfaces.transaction import ITransactionManager

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """
    At most ``pool_size`` connections to one database file.

    Connections are opened on first demand and kept for reuse; callers
    beyond the limit wait for one to be released.
    """

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._slots = asyncio.Semaphore(pool_size)
        self._idle: list[aiosqlite.Connection] = []
        self._opened: list[aiosqlite.Connection] = []
        self._closed = False

    @property
    def size(self) -> int:
        """Number of connections currently open."""
        return len(self._opened)

    async def _open(self) -> aiosqlite.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        for pragma in (*_PRAGMAS, f"PRAGMA busy_timeout={self.busy_timeout}"):
            await conn.execute(pragma)
        conn.row_factory = aiosqlite.Row
        self._opened.append(conn)
        logger.debug("sqlite_connection_opened", db_path=str(self.db_path), open=self.size)
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; it goes back to the pool on exit."""
        if self._closed:
            raise RuntimeError("connection pool is closed")
        async with self._slots:
            conn = self._idle.pop() if self._idle else await self._open()
            try:
                yield conn
            finally:
                self._idle.append(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection inside ``BEGIN IMMEDIATE``; commit or roll back on exit."""
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")

    async def close(self) -> None:
        self._closed = True
        for conn in self._opened:
            await conn.close()
        logger.info("connection_pool_closed", closed=len(self._opened))
        self._opened.clear()
        self._idle.clear()


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool for the configured database."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(storage.db_path, storage.pool_size, storage.busy_timeout)
        logger.info("connection_pool_created", db_path=str(storage.db_path), size=storage.pool_size)
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Autocommit connection from the global pool."""
    async with (await get_pool()).acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Write transaction on a connection from the global pool."""
    async with (await get_pool()).transaction() as conn:
        yield conn


@asynccontextmanager
async def use_connection(
    tx: aiosqlite.Connection | None = None,
    write: bool = False,
) -> AsyncIterator[aiosqlite.Connection]:
    """
    Run against the caller's transaction when one is given.

    Without *tx*, writes get their own transaction and reads an
    autocommit connection.
    """
    if tx is not None:
        yield tx
    elif write:
        async with get_transaction() as conn:
            yield conn
    else:
        async with get_connection() as conn:
            yield conn


class SQLiteTransactionManager(ITransactionManager):
    """Hands out pooled write transactions to use cases."""

    def transaction(self) -> AbstractAsyncContextManager[aiosqlite.Connection]:
        return get_transaction()
