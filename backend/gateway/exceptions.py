"""
Receptor Gateway: Error Types and Exception Hierarchy
======================================================

What:  The error kinds the receptor API reports, each bound to its canonical
       HTTP status, plus the exceptions that carry them.
How:   ErrorType is a str enum whose values are the wire symbols written to
       the "type" field of an error body. Each GatewayError subclass pins one
       ErrorType; the exception handlers registered in main.py render any
       GatewayError through the Error Responder (responses.py).

Exception Hierarchy:
    GatewayError (base)
    ├── InvalidRequestError   → InvalidRequest    400
    ├── InvalidJSONError      → InvalidJSON       400
    ├── UnauthorizedError     → Unauthorized      401
    ├── NotFoundError         → ResourceNotFound  404
    └── ConflictError         → ResourceConflict  409

The middleware chain never raises these. Basic auth rejection is converted
straight into a 401 response; the exceptions exist for handlers mounted
behind the chain.
"""

import enum
from http import HTTPStatus
from typing import Any, Dict, Optional


class ErrorType(str, enum.Enum):
    """Wire symbol of an error, serialized verbatim into the "type" field."""

    INVALID_JSON = "InvalidJSON"
    INVALID_REQUEST = "InvalidRequest"
    UNAUTHORIZED = "Unauthorized"
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    RESOURCE_CONFLICT = "ResourceConflict"
    UNKNOWN_ERROR = "UnknownError"

    @property
    def status_code(self) -> int:
        return int(_STATUS_BY_TYPE[self])


_STATUS_BY_TYPE: Dict[ErrorType, int] = {
    ErrorType.INVALID_JSON: HTTPStatus.BAD_REQUEST,
    ErrorType.INVALID_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorType.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorType.RESOURCE_NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorType.RESOURCE_CONFLICT: HTTPStatus.CONFLICT,
    ErrorType.UNKNOWN_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class GatewayError(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        error_type: ErrorType written to the response body
        message:    Client-facing description (safe to return)
        context:    Debug details, logged server-side and never returned
    """

    error_type: ErrorType = ErrorType.UNKNOWN_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = HTTPStatus(self.error_type.status_code).phrase
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.error_type.status_code


class InvalidRequestError(GatewayError):
    """The request was well-formed HTTP but semantically invalid."""

    error_type = ErrorType.INVALID_REQUEST


class InvalidJSONError(GatewayError):
    """The request body could not be decoded as JSON."""

    error_type = ErrorType.INVALID_JSON


class UnauthorizedError(GatewayError):
    """
    The caller did not present acceptable credentials.

    The default message is the reason phrase for 401, which is also what
    the Basic Auth middleware sends on rejection.
    """

    error_type = ErrorType.UNAUTHORIZED


class NotFoundError(GatewayError):
    """A requested resource does not exist."""

    error_type = ErrorType.RESOURCE_NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(GatewayError):
    """The resource already exists or is in a conflicting state."""

    error_type = ErrorType.RESOURCE_CONFLICT
