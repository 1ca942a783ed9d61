"""
Receptor Gateway: Package Initializer
======================================

The authentication and cross-origin boundary of the receptor HTTP API.

    ┌─────────────────────────────────────┐
    │   Middleware (CORS, cookie, Basic)  │  ← decides whether a request passes
    ├─────────────────────────────────────┤
    │   Error Responder                   │  ← JSON {"type", "message"} bodies
    ├─────────────────────────────────────┤
    │   Downstream handler (ASGI app)     │  ← business logic, out of scope here
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
