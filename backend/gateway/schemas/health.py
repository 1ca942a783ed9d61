"""
Receptor Gateway: Health Schema
================================
"""

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness checks and operators."""

    status: str = Field(description="Always 'healthy' while the process serves requests")
    version: str = Field(description="Gateway version")
    middleware: List[str] = Field(description="Active decorators, outermost first")
    uptime_seconds: float = Field(description="Seconds since the service started")
