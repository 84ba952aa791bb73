"""
MoodJournal Backend — Health Check Route
=========================================

What:  Liveness endpoint for Docker health checks and load balancers.
How:   The service has no external dependencies, so a responding process
       is a healthy one; the payload adds version and uptime.
"""

import time

from fastapi import APIRouter

from moodjournal import __version__
from moodjournal.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
