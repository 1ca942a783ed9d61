"""
Receptor Gateway: Cookie Authorization Bridge
==============================================

What:  Copies the value of a configured cookie into the request's
       Authorization header before the wrapped handler sees it.
Who:   Browser clients that cannot attach custom headers to cross-origin
       requests but can carry a cookie.

    Cookie: Cookie-Authorization=Basic dXNlcjpwYXNz
    Authorization: whatever-was-there
    → handler sees  Authorization: Basic dXNlcjpwYXNz

Without the cookie the Authorization header passes through untouched.
This middleware never rejects a request.

Duplicate cookies:
    "Cookie: c=first; c=second" bridges "first". Browsers send the cookie
    with the most specific path first (RFC 6265 §5.4), so the first pair is
    the one set closest to this resource. request.cookies would return the
    last one, which is why the header is scanned here instead.
"""

import logging
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request, cookie_parser
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


def first_cookie(request: Request, name: str) -> Optional[str]:
    """Value of the first ``name`` cookie in the request, or None."""
    for header in request.headers.getlist("Cookie"):
        for pair in header.split(";"):
            # Parsing pair by pair keeps Starlette's unquoting rules
            value = cookie_parser(pair).get(name)
            if value is not None:
                return value
    return None


class CookieAuthMiddleware(BaseHTTPMiddleware):
    """
    Promotes the ``cookie_name`` cookie to the Authorization header.

    Sets request.state.cookie_bridged (True/False) for the access log.
    """

    def __init__(self, app: ASGIApp, cookie_name: str) -> None:
        super().__init__(app)
        if not cookie_name:
            raise ValueError("cookie_name must be a non-empty string")
        self.cookie_name = cookie_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        value = first_cookie(request, self.cookie_name)
        request.state.cookie_bridged = value is not None
        if value is not None:
            # Rewrites scope["headers"]; call_next forwards that same scope.
            # Setting replaces every existing Authorization entry.
            MutableHeaders(scope=request.scope)["Authorization"] = value
            logger.debug("Authorization taken from cookie %r", self.cookie_name)

        return await call_next(request)
