"""
Alumnos API: Health Check Route
===============================

What:  GET /health reports the application version and whether the store
       answers a SELECT 1.
Who:   Container health checks and load balancers.
"""

import logging
import time

from fastapi import APIRouter, Request

from alumnos_api import __version__
from alumnos_api.schemas.student import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    repository = request.app.state.student_repository

    if await repository.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
