"""
Maison Catalog API: Health Check Route
========================================

What:  GET /health for container probes and load balancers.

Status levels:
    - healthy:   store reachable and image host available (HTTP 200)
    - degraded:  store reachable, image host unavailable or unconfigured;
                 reads still work, creates will fail (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text

from maison import __version__
from maison.dependencies import get_image_host
from maison.schemas.common import HealthResponse
from maison.services.image_host_base import ImageHost

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(
    response: Response,
    image_host: ImageHost = Depends(get_image_host),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        from maison.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    host_status = await image_host.health_check()
    if host_status != "available" and overall == "healthy":
        overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        image_host=host_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
