"""Health check endpoints.

``/health`` is a liveness probe that never touches dependencies;
``/health/detailed`` probes the database and answers 503 when it is not
healthy.
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Request, Response, status

from app.database.connection import check_database_health
from app.schemas.health import DetailedHealthResponse, HealthResponse


router = APIRouter(tags=["health"])


def _uptime(request: Request) -> float:
    started_at = getattr(request.app.state, "started_at", None)
    if started_at is None:
        return 0.0
    return round(time.monotonic() - started_at, 3)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(request: Request) -> HealthResponse:
    """Report that the process is up."""
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
        uptime_seconds=_uptime(request),
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    summary="Readiness probe",
    responses={503: {"description": "A dependency is unavailable"}},
)
async def detailed_health_check(
    request: Request,
    response: Response,
) -> DetailedHealthResponse:
    """Report process and database status."""
    settings = request.app.state.settings
    container = getattr(request.app.state, "container", None)
    dependencies = await check_database_health(
        container.pool if container is not None else None
    )

    healthy = all(state == "healthy" for state in dependencies.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return DetailedHealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
        uptime_seconds=_uptime(request),
        dependencies=dependencies,
    )
