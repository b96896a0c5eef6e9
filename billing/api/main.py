"""
HTTP adapter: builds the FastAPI app around the billing use cases.

Run with ``python -m billing serve`` or any ASGI server pointed at
``billing.api.main:create_app`` with the factory flag.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from billing.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from billing.api.middleware.error_handler import setup_exception_handlers
from billing.api.routes import (
    health_router,
    invoices_router,
    products_router,
    reports_router,
)
from billing.config import configure_logging, get_logger, get_settings
from billing.core.exceptions import DatabaseError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the pool on startup; close the pool on shutdown."""
    from billing.infrastructure.storage.sqlite import close_pool, get_pool
    from billing.infrastructure.storage.sqlite.migrations import initialize_database

    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    results = await initialize_database()
    failed = [r for r in results if not r.success]
    if failed:
        raise DatabaseError("migrate", f"{failed[0].version}: {failed[0].error}")
    logger.info("database_initialized", applied=len(results))

    await get_pool()
    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Assemble middleware, error handlers and routers."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant invoicing, inventory and sales reporting",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(invoices_router)
    app.include_router(reports_router)

    return app
