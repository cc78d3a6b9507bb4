"""Category service: existence and name uniqueness."""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from app.core.exceptions import ConflictError, NotFoundError
from app.observability.logging import get_logger


if TYPE_CHECKING:
    from app.database.repositories.category import CategoryRepository
    from app.schemas.category import Category


logger = get_logger(__name__)

CATEGORY = "Category"
DUPLICATE_NAME_MESSAGE = "A category with this name already exists"


class CategoryService:
    """Business rules around ``categorias``."""

    def __init__(self, repository: CategoryRepository) -> None:
        self._repository = repository

    async def get_all(self) -> list[Category]:
        return await self._repository.find_all()

    async def get_by_id(self, category_id: int) -> Category:
        category = await self._repository.find_by_id(category_id)
        if category is None:
            raise NotFoundError(CATEGORY, category_id)
        return category

    async def create(self, nome: str) -> Category:
        """Create a category.

        Raises:
            ConflictError: The name is already taken.
        """
        if await self._repository.find_by_name(nome) is not None:
            raise ConflictError(DUPLICATE_NAME_MESSAGE, nome=nome)
        try:
            category = await self._repository.create(nome)
        except asyncpg.UniqueViolationError:
            raise ConflictError(DUPLICATE_NAME_MESSAGE, nome=nome) from None
        logger.info("Category created", category_id=category.id, nome=category.nome)
        return category

    async def update(self, category_id: int, nome: str) -> Category:
        """Rename a category.

        Raises:
            NotFoundError: No category has this id.
            ConflictError: Another category already uses the name.
        """
        await self.get_by_id(category_id)
        existing = await self._repository.find_by_name(nome)
        if existing is not None and existing.id != category_id:
            raise ConflictError(DUPLICATE_NAME_MESSAGE, nome=nome)
        try:
            updated = await self._repository.update(category_id, nome)
        except asyncpg.UniqueViolationError:
            raise ConflictError(DUPLICATE_NAME_MESSAGE, nome=nome) from None
        if updated is None:
            raise NotFoundError(CATEGORY, category_id)
        logger.info("Category updated", category_id=category_id, nome=nome)
        return updated

    async def delete(self, category_id: int) -> Category:
        """Delete a category and return the removed record.

        Recipes in the category are kept with no category.
        """
        await self.get_by_id(category_id)
        deleted = await self._repository.delete(category_id)
        if deleted is None:
            raise NotFoundError(CATEGORY, category_id)
        logger.info("Category deleted", category_id=category_id)
        return deleted
