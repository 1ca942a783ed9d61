"""
Receptor Gateway: Error Body Schema
====================================

What:  The two-field JSON object every error response carries.
Shape: {"type": "<ErrorType>", "message": "<human readable text>"}

Field order is part of the contract; clients compare bodies byte-for-byte.
"""

from pydantic import BaseModel, Field

from gateway.exceptions import ErrorType


class Error(BaseModel):
    """Serialized error returned by the gateway and the handlers behind it."""

    type: ErrorType = Field(description="Error kind, e.g. Unauthorized")
    message: str = Field(description="Human-readable description")
