"""Application factory for creating FastAPI instances.

``create_app`` wires settings, rate limiting, exception handlers, middleware
and routers. Services are not built here: the lifespan handler builds the
service container once the database pool is open (tests attach their own).
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.api.endpoints import health, root
from app.api.router import router as api_router
from app.core.config import Settings, get_settings
from app.core.events import lifespan
from app.core.exceptions import setup_exception_handlers
from app.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.core.middleware.request_context import PROCESS_TIME_HEADER, REQUEST_ID_HEADER
from app.core.rate_limit import setup_rate_limiting


if TYPE_CHECKING:
    from app.core.container import ServiceContainer


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().
        container: Pre-built service container. When given, startup skips the
            database pool and uses it as is.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe catalog API: users, categories and recipes.",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings
    app.state.container = container
    app.state.started_at = time.monotonic()

    setup_rate_limiting(app, settings)
    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. From the request's
    perspective: security headers, request context (id, timing, access log),
    gzip, CORS.
    """
    if settings.api.cors_origins:
        wildcard = settings.api.cors_origins == ["*"]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=not wildcard,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER, PROCESS_TIME_HEADER],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        RequestContextMiddleware,
        exclude_paths={"/health", "/favicon.ico"},
    )

    app.add_middleware(
        SecurityHeadersMiddleware,
        api_prefix=settings.api.prefix,
        enable_hsts=settings.is_production,
    )


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount the API under its prefix; root and health stay at the top level."""
    app.include_router(api_router, prefix=settings.api.prefix)
    app.include_router(health.router)
    app.include_router(root.router)
