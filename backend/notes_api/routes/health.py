"""
Notes API — Health Check Route
===============================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks the database (SELECT 1) and the cache (PING).

Status levels:
    - healthy:   Database and cache reachable (HTTP 200)
    - degraded:  Cache down; reads fall through to the database (HTTP 200)
    - unhealthy: Database down (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response

from notes_api import __version__
from notes_api.database import ping_database
from notes_api.schemas.note import HealthResponse
from notes_api.services.cache_service import redis_cache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    cache_status = "connected"
    overall = "healthy"

    # ── Check Cache ───────────────────────────────────────────────────────
    if not await redis_cache.health_check():
        cache_status = "disconnected"
        overall = "degraded"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        await ping_database()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        cache=cache_status,
        cache_stats=redis_cache.stats(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
