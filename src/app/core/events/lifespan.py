"""Application lifespan: database pool and service container."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from app.core.container import ServiceContainer
from app.database.connection import (
    apply_schema,
    close_database_pool,
    create_database_pool,
)
from app.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from app.core.config import Settings

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Open the pool, optionally create the schema, build the container."""
    setup_logging(settings)
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    if not settings.JWT_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY is empty; tokens are signed with an empty key")

    pool = await create_database_pool(settings)
    if settings.database.apply_schema:
        await apply_schema(pool)

    app.state.container = ServiceContainer.from_pool(settings, pool)
    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    container: ServiceContainer | None = getattr(app.state, "container", None)
    if container is not None:
        await close_database_pool(container.pool)
        app.state.container = None
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Run startup before serving and shutdown afterwards.

    A container already attached to ``app.state`` (tests) is left alone.
    """
    if getattr(app.state, "container", None) is not None:
        yield
        return

    await _startup(app, app.state.settings)
    try:
        yield
    finally:
        await _shutdown(app)
