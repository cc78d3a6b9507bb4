"""PostgreSQL connection pool management.

The pool is created once during application startup and handed to the
service container; nothing in this module keeps a reference to it.
"""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

import asyncpg

from app.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from app.core.config import Settings

logger = get_logger(__name__)

SCHEMA_RESOURCE = "schema.sql"


async def create_database_pool(settings: Settings) -> Pool:
    """Create the asyncpg pool and verify it with a round trip."""
    db = settings.database
    logger.info(
        "Initializing database connection pool",
        url=settings.database_url,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
    )

    pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=True if db.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.exception("Failed to connect to database")
        await pool.close()
        raise

    logger.info("Database connection established successfully")
    return pool


async def close_database_pool(pool: Pool | None) -> None:
    """Close the pool if one was created."""
    if pool is None:
        return
    logger.info("Closing database connection pool")
    await pool.close()
    logger.info("Database connection pool closed")


def load_schema_sql() -> str:
    """Read the bundled DDL script."""
    return resources.files("app.database").joinpath(SCHEMA_RESOURCE).read_text(
        encoding="utf-8"
    )


async def apply_schema(pool: Pool) -> None:
    """Create tables and indexes that do not exist yet."""
    logger.info("Applying database schema")
    async with pool.acquire() as conn:
        await conn.execute(load_schema_sql())


async def check_database_health(pool: Pool | None) -> dict[str, str]:
    """Probe the database with ``SELECT 1``."""
    if pool is None:
        return {"database": "not_initialized"}
    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError, TimeoutError) as e:
        logger.warning("Database health check failed", error=str(e))
        return {"database": "unhealthy"}
    return {"database": "healthy"}
