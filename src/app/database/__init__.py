"""PostgreSQL database layer.

This module provides:
- Connection pool management and schema bootstrap
- Repository classes for data access
- Health check utilities
"""

from app.database.connection import (
    apply_schema,
    check_database_health,
    close_database_pool,
    create_database_pool,
)
from app.database.repositories import (
    CategoryRepository,
    RecipeRepository,
    UserRepository,
)


__all__ = [
    "CategoryRepository",
    "RecipeRepository",
    "UserRepository",
    "apply_schema",
    "check_database_health",
    "close_database_pool",
    "create_database_pool",
]
