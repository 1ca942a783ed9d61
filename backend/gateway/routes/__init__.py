# Routes package init
"""
Receptor Gateway: Routes Package
=================================

Route Inventory:
    - health.py:  GET /health   (liveness and active middleware report)

Everything else is served by the downstream handler mounted in main.py.
"""
