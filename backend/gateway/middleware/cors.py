"""
Receptor Gateway: CORS Middleware
==================================

What:  Credentialed CORS negotiation for browser clients on other origins.
How:   Reads the Origin header of every request and either answers the
       preflight itself or annotates the wrapped handler's response.

Origin policy:
    Origin absent, "" or "*"   → no CORS headers, request still served
    any other value           → echoed in Access-Control-Allow-Origin,
                                 Access-Control-Allow-Credentials: true

    The wildcard is never echoed: browsers refuse "*" together with
    credentials, so such requests are served without annotation.

Preflight (OPTIONS carrying Access-Control-Request-Method):
    The wrapped handler is never called. The middleware answers 200 and
    echoes the requested method and headers back as the allowed ones.

    OPTIONS /tasks
    Origin: example.com
    Access-Control-Request-Method: PUT
    Access-Control-Request-Headers: content-type,authorization

    → 200 OK
      Access-Control-Allow-Origin: example.com
      Access-Control-Allow-Credentials: true
      Access-Control-Allow-Methods: PUT
      Access-Control-Allow-Headers: content-type,authorization
"""

import logging
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"

# Origins that are served but never annotated
# What: "" is an origin-less client; "*" cannot be echoed with credentials
UNANNOTATED_ORIGINS = frozenset({"", "*"})

# Values of request.state.cors, read by the access log
CORS_PREFLIGHT = "preflight"
CORS_ANNOTATED = "annotated"
CORS_SKIPPED = "skipped"


def is_valid_origin(origin: Optional[str]) -> bool:
    return origin is not None and origin not in UNANNOTATED_ORIGINS


def is_preflight(request: Request) -> bool:
    return request.method == "OPTIONS" and bool(request.headers.get(REQUEST_METHOD))


class CORSMiddleware(BaseHTTPMiddleware):
    """
    Echo-the-origin CORS handling with credentials allowed.

    Holds no configuration and keeps nothing between requests; every
    decision is made from the headers of the request at hand.

    What it leaves behind: request.state.cors is set to "preflight",
    "annotated" or "skipped" for the access log.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("Origin")

        # ── Preflight: answered here, the wrapped handler never runs ──────
        if is_preflight(request):
            request.state.cors = CORS_PREFLIGHT
            logger.debug(
                "CORS preflight from %r for %s %s",
                origin,
                request.headers.get(REQUEST_METHOD),
                request.url.path,
            )
            response = Response(status_code=200)
            self._annotate(response.headers, origin)
            response.headers[ALLOW_METHODS] = request.headers[REQUEST_METHOD]
            # Omitted rather than sent empty when the browser asked for none
            requested_headers = request.headers.get(REQUEST_HEADERS)
            if requested_headers:
                response.headers[ALLOW_HEADERS] = requested_headers
            return response

        # ── Actual request: serve first, annotate the outgoing response ───
        request.state.cors = CORS_ANNOTATED if is_valid_origin(origin) else CORS_SKIPPED
        response = await call_next(request)
        self._annotate(response.headers, origin)
        return response

    @staticmethod
    def _annotate(headers: MutableHeaders, origin: Optional[str]) -> None:
        if not is_valid_origin(origin):
            return
        headers[ALLOW_ORIGIN] = origin
        headers[ALLOW_CREDENTIALS] = "true"
