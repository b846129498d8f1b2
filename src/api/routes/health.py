"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import HealthResponse
from src.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Pings SQLite, reports the schema version and the loaded product count.
    """
    from src.application.services import get_workspace
    from src.infrastructure.storage.sqlite import get_pool
    from src.infrastructure.storage.sqlite.migrations import get_current_version

    try:
        pool = await get_pool()
        latency = await pool.ping()
        async with pool.acquire() as conn:
            version = await get_current_version(conn)
        workspace = await get_workspace()

        return HealthResponse(
            status="healthy",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
            database=f"sqlite ({latency:.1f}ms)",
            schema_version=version,
            products=len(workspace.entity_store.products),
        )

    except Exception as e:
        return HealthResponse(
            status="unhealthy",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
            database=f"unavailable: {e}",
        )
