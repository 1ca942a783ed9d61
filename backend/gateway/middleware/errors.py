"""
Receptor Gateway: Unexpected Error Middleware
==============================================

What:  Converts any exception escaping the handler into an UnknownError
       (500) {"type","message"} response.
Where: Innermost user middleware, directly around the router. The
       response therefore passes back out through Basic auth, the cookie
       bridge, CORS, request ID and the access log like any other response:
       a 500 keeps its Access-Control-Allow-Origin and X-Request-ID headers.

GatewayError subclasses never reach this layer; FastAPI's exception
handlers (main.py) render them first. The app-level Exception handler stays
registered for failures raised by the middleware themselves.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gateway.exceptions import ErrorType
from gateway.middleware.request_id import request_id_var
from gateway.responses import error_response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Last line of defense inside the chain; the trace goes to the log only."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error: %s",
                request_id_var.get(""),
                str(exc),
                exc_info=True,
            )
            return error_response(ErrorType.UNKNOWN_ERROR, UNEXPECTED_ERROR_MESSAGE)
