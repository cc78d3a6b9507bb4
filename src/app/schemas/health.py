"""Health check schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from app.schemas.base import APIResponse


class HealthResponse(APIResponse):
    """Liveness probe response."""

    status: str = Field(..., examples=["healthy"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str
    uptime_seconds: float = Field(..., ge=0)


class DetailedHealthResponse(HealthResponse):
    """Readiness response including dependency status."""

    dependencies: dict[str, str] = Field(default_factory=dict)
