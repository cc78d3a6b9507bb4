"""Root endpoint providing service information."""

from __future__ import annotations

from fastapi import APIRouter, Request

from app.schemas.root import RootResponse


router = APIRouter(tags=["root"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="Root endpoint",
)
async def root(request: Request) -> RootResponse:
    """Return service name, version and links for discovery."""
    settings = request.app.state.settings
    return RootResponse(
        service=settings.app.name,
        version=settings.app.version,
        status="operational",
        api=settings.api.prefix,
        docs="/docs" if settings.is_non_production else "disabled",
        health="/health",
    )
