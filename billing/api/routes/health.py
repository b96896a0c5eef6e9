"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from billing.application.dto.responses import HealthResponse
from billing.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service health with a database round trip.

    Reports ``degraded`` instead of failing when SQLite is unreachable.
    """
    import aiosqlite

    from billing.infrastructure.storage.sqlite import get_connection

    database = "ok"
    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except (aiosqlite.Error, OSError) as e:
        logger.warning("health_database_unavailable", error=str(e))
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=get_settings().app_version,
        database=database,
        uptime_seconds=time.time() - _start_time,
    )
