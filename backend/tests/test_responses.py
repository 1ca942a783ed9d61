"""
Receptor Gateway: Error Responder and Exception Tests
======================================================
"""

import json

import pytest

from gateway.exceptions import (
    ConflictError,
    ErrorType,
    GatewayError,
    InvalidJSONError,
    NotFoundError,
    UnauthorizedError,
)
from gateway.responses import error_response, exception_response


class TestErrorResponse:

    def test_unauthorized_body_and_status(self):
        response = error_response(ErrorType.UNAUTHORIZED)

        assert response.status_code == 401
        assert response.body == b'{"type":"Unauthorized","message":"Unauthorized"}'
        assert response.media_type == "application/json"

    def test_custom_message(self):
        response = error_response(ErrorType.INVALID_REQUEST, "guid is required")

        assert response.status_code == 400
        assert json.loads(response.body) == {
            "type": "InvalidRequest",
            "message": "guid is required",
        }

    def test_extra_headers(self):
        response = error_response(
            ErrorType.UNAUTHORIZED, headers={"WWW-Authenticate": 'Basic realm="receptor"'}
        )

        assert response.headers["www-authenticate"] == 'Basic realm="receptor"'

    @pytest.mark.parametrize(
        "error_type, status, phrase",
        [
            (ErrorType.INVALID_JSON, 400, "Bad Request"),
            (ErrorType.INVALID_REQUEST, 400, "Bad Request"),
            (ErrorType.UNAUTHORIZED, 401, "Unauthorized"),
            (ErrorType.RESOURCE_NOT_FOUND, 404, "Not Found"),
            (ErrorType.RESOURCE_CONFLICT, 409, "Conflict"),
            (ErrorType.UNKNOWN_ERROR, 500, "Internal Server Error"),
        ],
    )
    def test_status_and_default_message_per_type(self, error_type, status, phrase):
        response = error_response(error_type)

        assert response.status_code == status
        assert json.loads(response.body) == {"type": error_type.value, "message": phrase}


class TestExceptions:

    def test_unauthorized_error_defaults(self):
        exc = UnauthorizedError()

        assert exc.status_code == 401
        assert exc.message == "Unauthorized"

    def test_exception_response_uses_type_and_message(self):
        response = exception_response(InvalidJSONError("body is not JSON"))

        assert response.status_code == 400
        assert json.loads(response.body) == {"type": "InvalidJSON", "message": "body is not JSON"}

    def test_not_found_message_and_context(self):
        exc = NotFoundError("task", "task-guid-1")

        assert exc.status_code == 404
        assert exc.message == "task with ID 'task-guid-1' was not found"
        assert exc.context == {"resource": "task", "resource_id": "task-guid-1"}

    def test_base_error_is_unknown(self):
        exc = GatewayError()

        assert exc.error_type is ErrorType.UNKNOWN_ERROR
        assert exc.status_code == 500
        assert exc.message == "Internal Server Error"

    def test_conflict_error(self):
        assert ConflictError("already exists").status_code == 409
