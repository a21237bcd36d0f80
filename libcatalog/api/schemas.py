"""
API Schemas

Transport-only models: error envelopes and system endpoints. Book
request/response projections live in ``libcatalog.schemas``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every failure response."""

    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Error kind")
    detail: Optional[str] = None
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    components: dict[str, str] = Field(default_factory=dict)
