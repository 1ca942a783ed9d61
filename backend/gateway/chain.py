"""
Receptor Gateway: Middleware Chain Assembly
============================================

What:  Nests the optional decorators around a handler in their fixed order.

    request → CORS → Cookie bridge → Basic auth → handler

How:   wrap_handler() builds the chain by direct construction, each
       middleware receiving the next one as its `app`. middleware_stack()
       returns the same chain as Starlette Middleware entries for an
       application factory (Starlette runs the first entry outermost).

Preflights are answered before Basic auth runs, and 401 rejections still
carry CORS headers. The cookie bridge runs before Basic auth, so a cookie
can supply the credentials.
"""

from typing import List, Optional

from starlette.middleware import Middleware
from starlette.types import ASGIApp

from gateway.config import Settings
from gateway.middleware.basic_auth import BasicAuthMiddleware
from gateway.middleware.cookie_auth import CookieAuthMiddleware
from gateway.middleware.cors import CORSMiddleware


def wrap_handler(
    handler: ASGIApp,
    *,
    cors: bool = False,
    cookie_name: Optional[str] = None,
    username: Optional[str] = None,
    password: str = "",
) -> ASGIApp:
    """
    Return ``handler`` wrapped in every decorator that is configured.

    With nothing configured the handler itself is returned.
    """
    # Built inside out: Basic auth wraps the handler, CORS wraps everything
    app = handler
    if username:
        app = BasicAuthMiddleware(app, username=username, password=password)
    if cookie_name:
        app = CookieAuthMiddleware(app, cookie_name=cookie_name)
    if cors:
        app = CORSMiddleware(app)
    return app


def middleware_stack(settings: Settings) -> List[Middleware]:
    """The configured chain as Starlette Middleware entries, outermost first."""
    stack: List[Middleware] = []
    if settings.cors_enabled:
        stack.append(Middleware(CORSMiddleware))
    if settings.cookie_name:
        stack.append(Middleware(CookieAuthMiddleware, cookie_name=settings.cookie_name))
    if settings.basic_auth_enabled:
        stack.append(
            Middleware(
                BasicAuthMiddleware,
                username=settings.basic_auth_username,
                password=settings.basic_auth_password,
            )
        )
    return stack
