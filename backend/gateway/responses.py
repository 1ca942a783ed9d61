"""
Receptor Gateway: Error Responder
==================================

What:  Turns a typed error into a JSON response whose status code matches
       the error type.
Who:   The Basic Auth middleware (401 rejections) and the exception handlers
       registered in main.py.

Example:
    error_response(ErrorType.UNAUTHORIZED)
    → 401, body {"type":"Unauthorized","message":"Unauthorized"}
"""

from http import HTTPStatus
from typing import Mapping, Optional

from starlette.responses import JSONResponse

from gateway.exceptions import ErrorType, GatewayError
from gateway.schemas.error import Error


def error_response(
    error_type: ErrorType,
    message: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """
    Build the JSON error response for ``error_type``.

    ``message`` defaults to the standard reason phrase of the type's status
    code. JSONResponse renders compact JSON, so the body carries no
    whitespace between tokens.
    """
    # Status always derives from the type; callers cannot pick a mismatched one
    status_code = error_type.status_code
    if message is None:
        message = HTTPStatus(status_code).phrase
    body = Error(type=error_type, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def exception_response(exc: GatewayError) -> JSONResponse:
    return error_response(exc.error_type, exc.message)
