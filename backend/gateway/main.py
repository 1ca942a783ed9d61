"""
Receptor Gateway: FastAPI Application Factory
==============================================

What:  Builds the ASGI application that fronts the receptor API.
How:   create_app() registers the configured middleware chain, the exception
       handlers that render errors through the Error Responder, the /health
       route, and optionally mounts a downstream ASGI handler at "/".
Who:   uvicorn (`uvicorn gateway.main:app`) and the test suite.

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                      FastAPI App                          │
    │                                                           │
    │  Middleware Chain (outermost first):                      │
    │  Request ID → Logging → CORS → Cookie bridge → Basic auth │
    │                                                           │
    │  Routes:       GET /health, downstream handler at "/"     │
    │                                                           │
    │  Exception Handlers:                                      │
    │  GatewayError → {"type","message"} with its status        │
    │  Exception    → UnknownError 500 (inside the chain)       │
    └───────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from starlette.middleware import Middleware
from starlette.types import ASGIApp

from gateway import __version__
from gateway.chain import middleware_stack
from gateway.config import Settings, settings as default_settings
from gateway.exceptions import ErrorType, GatewayError
from gateway.middleware.errors import UNEXPECTED_ERROR_MESSAGE, UnexpectedErrorMiddleware
from gateway.middleware.logging import RequestLoggingMiddleware
from gateway.middleware.request_id import RequestIDMiddleware, request_id_var
from gateway.responses import error_response, exception_response
from gateway.routes import health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """Configure the root logger once, writing to stdout."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    cfg: Settings = app.state.settings
    setup_logging(cfg.log_level)

    try:
        cfg.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    active = [entry.cls.__name__ for entry in middleware_stack(cfg)] or ["none"]
    logger.info("Receptor gateway %s starting", __version__)
    logger.info("Auth/CORS middleware: %s", ", ".join(active))
    logger.info("Listening on http://%s:%d", cfg.backend_host, cfg.backend_port)

    yield

    logger.info("Receptor gateway shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Render errors raised by route handlers as {"type", "message"} bodies.

        GatewayError subclasses → their own ErrorType and status
        Exception (fallback)    → UnknownError, 500, generic message

    Unexpected exceptions from routes and the mounted handler are already
    converted by UnexpectedErrorMiddleware inside the chain; the Exception
    handler here only sees failures of the middleware themselves, and its
    response skips the chain (no CORS or X-Request-ID headers).
    """

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.error_type.value, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.error_type.value, exc.message)
        return exception_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(ErrorType.UNKNOWN_ERROR, UNEXPECTED_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    handler: Optional[ASGIApp] = None,
) -> FastAPI:
    """
    Create the gateway application.

    Args:
        settings: Configuration for the chain; defaults to the environment.
        handler:  Downstream ASGI app served behind the chain at "/".
    """
    settings = settings or default_settings

    # Starlette runs the first entry of `middleware` outermost; add_middleware
    # inserts in front, so request ID and logging end up outside the chain.
    # UnexpectedErrorMiddleware is last: innermost, directly around the router.
    app = FastAPI(
        title="Receptor Gateway",
        version=__version__,
        middleware=middleware_stack(settings) + [Middleware(UnexpectedErrorMiddleware)],
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    if handler is not None:
        app.mount("/", handler)

    return app


app = create_app()
