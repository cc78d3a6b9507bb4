"""Service container: the application's object graph, built once at startup.

The container is stored on ``app.state.container`` and request handlers reach
services through the dependency functions in :mod:`app.api.dependencies`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.database.repositories.category import CategoryRepository
from app.database.repositories.recipe import RecipeRepository
from app.database.repositories.user import UserRepository
from app.services.auth import AuthService
from app.services.category import CategoryService
from app.services.recipe import RecipeService
from app.services.user import UserService


if TYPE_CHECKING:
    from asyncpg import Pool

    from app.core.config import Settings


@dataclass(frozen=True, slots=True)
class Repositories:
    users: UserRepository
    categories: CategoryRepository
    recipes: RecipeRepository


@dataclass(frozen=True, slots=True)
class ServiceContainer:
    """Services wired to one set of repositories."""

    settings: Settings
    auth: AuthService
    users: UserService
    categories: CategoryService
    recipes: RecipeService
    pool: Pool | None = None

    @classmethod
    def from_repositories(
        cls,
        settings: Settings,
        repositories: Repositories,
        pool: Pool | None = None,
    ) -> ServiceContainer:
        return cls(
            settings=settings,
            auth=AuthService(repositories.users, settings),
            users=UserService(repositories.users),
            categories=CategoryService(repositories.categories),
            recipes=RecipeService(repositories.recipes, repositories.categories),
            pool=pool,
        )

    @classmethod
    def from_pool(cls, settings: Settings, pool: Pool) -> ServiceContainer:
        """Wire the asyncpg repositories: repositories, then services."""
        repositories = Repositories(
            users=UserRepository(pool),
            categories=CategoryRepository(pool),
            recipes=RecipeRepository(
                pool, max_page_size=settings.pagination.max_page_size
            ),
        )
        return cls.from_repositories(settings, repositories, pool=pool)
