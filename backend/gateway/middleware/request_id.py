"""
Receptor Gateway: Request ID Middleware
========================================

What:  Tags every request with a correlation ID and returns it in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, stores
       it in a ContextVar for loggers and in request.state for handlers.

Runs outside the auth chain, so 401 rejections and preflight answers carry
an ID as well.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and propagates the X-Request-ID correlation header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # What: 8 hex chars, enough to correlate lines within one log stream
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
