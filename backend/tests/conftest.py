"""
Receptor Gateway: Test Configuration (conftest.py)
===================================================

What:  Shared fixtures for the test suite.
How:   Middleware is exercised through httpx.AsyncClient over ASGITransport;
       no server is started.

Fixtures:
    ├── fake_handler:  ASGI test double recording every call it receives
    └── make_client:   factory returning an AsyncClient bound to any ASGI app
"""

import os
from typing import AsyncIterator, Callable, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

# Keep the environment from enabling middleware on the module-level app
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ENABLED"] = "false"
os.environ["AUTH_COOKIE_NAME"] = ""
os.environ["BASIC_AUTH_USERNAME"] = ""
os.environ["BASIC_AUTH_PASSWORD"] = ""


class FakeHandler:
    """
    ASGI app standing in for the downstream business handler.

    Records how many times it was invoked and the request it received,
    then answers 200 with a fixed body and a marker header.
    """

    body = "handled"

    def __init__(self) -> None:
        self.requests: List[Request] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.requests.append(Request(scope, receive))
        response = PlainTextResponse(
            self.body, status_code=200, headers={"X-Handled-By": "fake"}
        )
        await response(scope, receive, send)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def request_for_call(self, index: int) -> Request:
        return self.requests[index]


@pytest.fixture
def fake_handler() -> FakeHandler:
    return FakeHandler()


@pytest_asyncio.fixture
async def make_client() -> AsyncIterator[Callable[[ASGIApp], AsyncClient]]:
    """
    Returns a factory; every client it creates is closed after the test.

    Usage:
        async def test_x(make_client, fake_handler):
            client = make_client(CORSMiddleware(fake_handler))
            response = await client.get("/")
    """
    clients: List[AsyncClient] = []

    def _make(app: ASGIApp) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
