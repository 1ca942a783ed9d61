# Middleware package init
"""
Receptor Gateway: Middleware Package
=====================================

Request decorators placed between the network listener and the API handlers.
Each one takes the wrapped ASGI app plus explicit configuration and keeps no
state between requests.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → [Cookie bridge] → [Basic auth] → [Errors] → Handler

    - request_id.py:   X-Request-ID correlation header
    - logging.py:      access log line per request, with the decorators' decisions
    - cors.py:         credentialed CORS, preflight short-circuit
    - cookie_auth.py:  cookie value promoted to the Authorization header
    - basic_auth.py:   HTTP Basic credential check, 401 on mismatch
    - errors.py:       unexpected exceptions → UnknownError 500 inside the chain

The three auth/CORS decorators are individually optional; see chain.py.
"""

from gateway.middleware.basic_auth import BasicAuthMiddleware
from gateway.middleware.cookie_auth import CookieAuthMiddleware
from gateway.middleware.cors import CORSMiddleware

__all__ = ["BasicAuthMiddleware", "CookieAuthMiddleware", "CORSMiddleware"]
