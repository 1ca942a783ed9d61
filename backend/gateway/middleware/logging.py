"""
Receptor Gateway: Access Logging Middleware
============================================

What:  One line per request recording what the auth boundary decided.
How:   Runs outside the CORS / cookie / Basic auth chain. The decorators
       leave markers on request.state (the ASGI scope "state" dict is shared
       by every layer of one request); after call_next returns, this
       middleware reads them back and summarizes the outcome.

Example lines (gateway.access logger):
    GET /tasks 401 0.4ms [a1b2c3d4] cookie=missing auth=rejected
    OPTIONS /tasks 200 0.1ms [e5f6a7b8] cors=preflight
    PUT /tasks/abc 200 12.3ms [c9d0e1f2] cors=annotated cookie=bridged auth=accepted

Level:
    preflight short-circuit → DEBUG   (browser chatter, no handler ran)
    5xx                     → ERROR
    4xx (401 rejections)    → WARNING
    everything else         → INFO

Never logged: header values. Authorization and the bridged cookie carry
credentials.
"""

import logging
import time
from typing import Any, Dict

from starlette.datastructures import State
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gateway.middleware.cors import CORS_PREFLIGHT
from gateway.middleware.request_id import request_id_var

logger = logging.getLogger("gateway.access")


def auth_outcome(state: State) -> Dict[str, Any]:
    """
    Collect the decorator markers present on ``state``.

    A decorator that is not part of the chain leaves no marker, so its key
    is simply absent.
    """
    outcome: Dict[str, Any] = {}
    cors = getattr(state, "cors", None)
    if cors is not None:
        outcome["cors"] = cors
    bridged = getattr(state, "cookie_bridged", None)
    if bridged is not None:
        outcome["cookie"] = "bridged" if bridged else "missing"
    basic_auth = getattr(state, "basic_auth", None)
    if basic_auth is not None:
        outcome["auth"] = basic_auth
    return outcome


def level_for(status: int, outcome: Dict[str, Any]) -> int:
    if outcome.get("cors") == CORS_PREFLIGHT:
        return logging.DEBUG
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log of the auth boundary: status, duration and decorator decisions."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        outcome = auth_outcome(request.state)
        summary = " ".join(f"{key}={value}" for key, value in outcome.items()) or "-"
        rid = request_id_var.get("")

        logger.log(
            level_for(response.status_code, outcome),
            "%s %s %d %.1fms [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            rid,
            summary,
            extra={
                "request_id": rid,
                "status": response.status_code,
                "auth_outcome": outcome,
            },
        )
        return response
