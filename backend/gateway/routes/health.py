"""
Receptor Gateway: Health Check Route
=====================================

What:  Liveness endpoint reporting version, uptime and which decorators the
       gateway is running.
Note:  The route sits behind the auth chain like every other path; liveness
       checks must send credentials when Basic auth is enabled.
"""

import logging
import time

from fastapi import APIRouter, Request

from gateway import __version__
from gateway.chain import middleware_stack
from gateway.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=__version__,
        middleware=[entry.cls.__name__ for entry in middleware_stack(settings)],
        uptime_seconds=round(time.time() - _start_time, 2),
    )
