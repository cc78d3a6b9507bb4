"""Root endpoint response schema."""

from __future__ import annotations

from pydantic import Field

from app.schemas.base import APIResponse


class RootResponse(APIResponse):
    """Basic service information for discovery."""

    service: str = Field(..., examples=["Recipe Catalog Service"])
    version: str = Field(..., examples=["1.0.0"])
    status: str = Field(..., examples=["operational"])
    api: str = Field(..., description="API prefix", examples=["/api"])
    docs: str = Field(..., description="Documentation URL or 'disabled'")
    health: str = Field(..., examples=["/health"])
