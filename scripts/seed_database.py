"""Create the schema (if missing) and load the default categories.

Usage:
    APP_ENV=development python scripts/seed_database.py
"""

import asyncio

from app.core.config import get_settings
from app.database.connection import apply_schema, close_database_pool, create_database_pool
from app.database.seed import seed_categories
from app.observability.logging import setup_logging


async def main() -> None:
    """Open a pool, bootstrap the schema and insert the default categories."""
    settings = get_settings()
    setup_logging(settings)

    pool = await create_database_pool(settings)
    try:
        await apply_schema(pool)
        await seed_categories(pool)
    finally:
        await close_database_pool(pool)


if __name__ == "__main__":
    asyncio.run(main())
