"""Health check schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    uptime: float
    version: str
    database: str  # "connected" or "disconnected"


class WelcomeResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str
    docs: str
