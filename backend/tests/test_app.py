"""
Receptor Gateway: Application Factory Tests
============================================

What we test:
    ✅ The chain configured in Settings guards the mounted handler
    ✅ /health reports the active middleware
    ✅ GatewayError and unexpected exceptions render as {"type", "message"}
    ✅ Responses carry X-Request-ID
"""

import pytest

from gateway.config import Settings
from gateway.exceptions import NotFoundError
from gateway.main import create_app

AUTH = ("user", "pass")


@pytest.fixture
def settings():
    return Settings(
        cors_enabled=True,
        auth_cookie_name="Cookie-Authorization",
        basic_auth_username="user",
        basic_auth_password="pass",
    )


class TestGuardedHandler:

    @pytest.mark.asyncio
    async def test_authenticated_request_reaches_handler(self, make_client, settings, fake_handler):
        client = make_client(create_app(settings, handler=fake_handler))

        response = await client.get("/tasks", auth=AUTH)

        assert response.status_code == 200
        assert response.text == "handled"
        assert fake_handler.call_count == 1

    @pytest.mark.asyncio
    async def test_unauthenticated_request_rejected(self, make_client, settings, fake_handler):
        client = make_client(create_app(settings, handler=fake_handler))

        response = await client.get("/tasks", headers={"Origin": "example.com"})

        assert response.status_code == 401
        assert response.json() == {"type": "Unauthorized", "message": "Unauthorized"}
        assert response.headers["access-control-allow-origin"] == "example.com"
        assert response.headers["x-request-id"]
        assert fake_handler.call_count == 0

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, make_client, settings, fake_handler):
        client = make_client(create_app(settings, handler=fake_handler))

        response = await client.get("/tasks", auth=AUTH, headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_no_middleware_configured(self, make_client, fake_handler):
        client = make_client(create_app(Settings(), handler=fake_handler))

        response = await client.get("/tasks", headers={"Origin": "example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers


class TestHealth:

    @pytest.mark.asyncio
    async def test_reports_active_middleware(self, make_client, settings):
        client = make_client(create_app(settings))

        response = await client.get("/health", auth=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["middleware"] == [
            "CORSMiddleware",
            "CookieAuthMiddleware",
            "BasicAuthMiddleware",
        ]

    @pytest.mark.asyncio
    async def test_requires_credentials(self, make_client, settings):
        client = make_client(create_app(settings))

        response = await client.get("/health")

        assert response.status_code == 401


class TestExceptionHandlers:

    @pytest.mark.asyncio
    async def test_gateway_error_rendered(self, make_client):
        app = create_app(Settings())

        @app.get("/tasks/{guid}")
        async def get_task(guid: str):
            raise NotFoundError("task", guid)

        response = await make_client(app).get("/tasks/abc")

        assert response.status_code == 404
        assert response.json() == {
            "type": "ResourceNotFound",
            "message": "task with ID 'abc' was not found",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_rendered_as_unknown(self, make_client):
        app = create_app(Settings())

        @app.get("/explode")
        async def explode():
            raise RuntimeError("secret internals")

        response = await make_client(app).get("/explode")

        assert response.status_code == 500
        assert response.json() == {
            "type": "UnknownError",
            "message": "An unexpected error occurred.",
        }
        assert "secret internals" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_chain_headers(self, make_client, settings):
        app = create_app(settings)

        @app.get("/explode")
        async def explode():
            raise RuntimeError("secret internals")

        response = await make_client(app).get(
            "/explode", auth=AUTH, headers={"Origin": "x.com"}
        )

        assert response.status_code == 500
        assert response.json()["type"] == "UnknownError"
        assert response.headers["access-control-allow-origin"] == "x.com"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_failing_mounted_handler_is_converted(self, make_client, settings):
        async def broken_handler(scope, receive, send):
            raise RuntimeError("downstream crashed")

        client = make_client(create_app(settings, handler=broken_handler))

        response = await client.get("/tasks", auth=AUTH, headers={"Origin": "x.com"})

        assert response.status_code == 500
        assert response.json()["type"] == "UnknownError"
        assert response.headers["access-control-allow-origin"] == "x.com"
