# Schemas package init
"""
Receptor Gateway: Response Schemas
===================================

Pydantic models for the JSON bodies the gateway writes itself:
    - error.py:   Error body ({"type", "message"}) used on every rejection
    - health.py:  GET /health payload
"""
