"""
NoteKeeper Backend - Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   With the SQL backend, runs SELECT 1 against the engine. The memory
       backend has no external dependency and is always healthy.

Status levels:
    - healthy:   storage reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 200, flagged in the body)
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from notekeeper import __version__
from notekeeper.config import settings
from notekeeper.database import engine
from notekeeper.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Probe the configured storage and report aggregate status."""
    overall = "healthy"
    db_status = "not_configured"

    if settings.storage_backend == "sql":
        db_status = "connected"
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            db_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        storage_backend=settings.storage_backend,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
