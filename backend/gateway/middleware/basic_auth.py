"""
Receptor Gateway: HTTP Basic Authentication Middleware
=======================================================

What:  Admits only requests carrying the configured username/password pair.
How:   Parses "Authorization: Basic <base64(user:pass)>", compares both
       fields byte-for-byte against the configured credentials, and either
       forwards the request or answers 401 itself.

Outcomes:
    exact match                               → wrapped handler, response untouched
    no header / other scheme / bad base64 /   → 401, wrapped handler not called
    missing ":" / wrong username or password

Rejection body (from the Error Responder):
    {"type":"Unauthorized","message":"Unauthorized"}

Both fields go through secrets.compare_digest and both comparisons always run.
"""

import base64
import binascii
import logging
import secrets
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from gateway.exceptions import ErrorType
from gateway.responses import error_response

logger = logging.getLogger(__name__)

_BASIC_PREFIX = "basic "

# Values of request.state.basic_auth, read by the access log
AUTH_ACCEPTED = "accepted"
AUTH_REJECTED = "rejected"


def parse_basic_auth(header: Optional[str]) -> Optional[Tuple[bytes, bytes]]:
    """
    Extract (username, password) from an Authorization header value.

    Returns None for anything that is not well-formed Basic credentials.
    The scheme name is matched case-insensitively; the payload must be
    standard base64 and is split at the first colon, so passwords may
    themselves contain colons.
    """
    if not header or header[: len(_BASIC_PREFIX)].lower() != _BASIC_PREFIX:
        return None

    try:
        decoded = base64.b64decode(header[len(_BASIC_PREFIX):], validate=True)
    except (binascii.Error, ValueError):
        return None

    username, sep, password = decoded.partition(b":")
    if not sep:
        return None
    return username, password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """
    Rejects every request whose Basic credentials differ from the configured pair.

    Sets request.state.basic_auth to "accepted" or "rejected" for the access log.
    """

    def __init__(self, app: ASGIApp, username: str, password: str) -> None:
        super().__init__(app)
        # Stored as bytes: the comparison is byte-for-byte, not per character
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._authorized(request.headers.get("Authorization")):
            request.state.basic_auth = AUTH_REJECTED
            # Method and path only: header values carry the credentials
            logger.warning(
                "Rejected unauthenticated request: %s %s",
                request.method,
                request.url.path,
            )
            return error_response(ErrorType.UNAUTHORIZED)

        request.state.basic_auth = AUTH_ACCEPTED
        return await call_next(request)

    def _authorized(self, header: Optional[str]) -> bool:
        credentials = parse_basic_auth(header)
        if credentials is None:
            return False

        username, password = credentials
        username_ok = secrets.compare_digest(username, self._username)
        password_ok = secrets.compare_digest(password, self._password)
        return username_ok and password_ok
