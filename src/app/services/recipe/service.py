"""Recipe service: category references and ownership.

Ownership is checked against a freshly loaded row and then the mutation is
issued as a separate statement; there is no transaction or version column
around the pair, so concurrent writes by the owner resolve as last write
wins, and an update racing a delete is reported as not found.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.core.exceptions import ForbiddenError, NotFoundError
from app.observability.logging import get_logger


if TYPE_CHECKING:
    from app.database.repositories.category import CategoryRepository
    from app.database.repositories.recipe import RecipeRepository
    from app.schemas.pagination import Page
    from app.schemas.recipe import RecipeCreate, RecipeFilters, RecipeUpdate, RecipeView


logger = get_logger(__name__)

RECIPE = "Recipe"
CATEGORY = "Category"
EDIT_FORBIDDEN_MESSAGE = "You do not have permission to edit this recipe"
DELETE_FORBIDDEN_MESSAGE = "You do not have permission to delete this recipe"


class RecipeService:
    """Business rules around ``receitas``."""

    def __init__(
        self,
        recipes: RecipeRepository,
        categories: CategoryRepository,
    ) -> None:
        self._recipes = recipes
        self._categories = categories

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_by_id(self, recipe_id: int) -> RecipeView:
        recipe = await self._recipes.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(RECIPE, recipe_id)
        return recipe

    async def get_all(
        self, page: int = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        return await self._recipes.find_all(page, page_size)

    async def get_by_user(
        self, user_id: int, page: int = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        return await self._recipes.find_by_user(user_id, page, page_size)

    async def get_by_category(
        self, category_id: int, page: int = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        """Page through a category; an unknown category is a 404, not an empty page."""
        await self._ensure_category(category_id)
        return await self._recipes.find_by_category(category_id, page, page_size)

    async def search(self, filters: RecipeFilters) -> Page[RecipeView]:
        if filters.id_categorias is not None:
            await self._ensure_category(filters.id_categorias)
        return await self._recipes.search(filters)

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, data: RecipeCreate, owner_id: int) -> RecipeView:
        """Create a recipe owned by ``owner_id``.

        Raises:
            NotFoundError: ``id_categorias`` references no category.
        """
        if data.id_categorias is not None:
            await self._ensure_category(data.id_categorias)
        recipe = await self._recipes.create(data, owner_id)
        logger.info("Recipe created", recipe_id=recipe.id, owner_id=owner_id)
        return recipe

    async def update(
        self, recipe_id: int, owner_id: int, data: RecipeUpdate
    ) -> RecipeView:
        """Apply the fields present in ``data``.

        Raises:
            NotFoundError: Unknown recipe, or unknown new category.
            ForbiddenError: ``owner_id`` does not own the recipe.
        """
        existing = await self.check_owner(recipe_id, owner_id, EDIT_FORBIDDEN_MESSAGE)
        return await self.apply_update(existing, data)

    async def apply_update(self, existing: RecipeView, data: RecipeUpdate) -> RecipeView:
        """Apply ``data`` to a recipe returned by :meth:`check_owner`.

        Raises:
            NotFoundError: Unknown new category, or the recipe was deleted
                after it was loaded.
        """
        changes = data.changes()
        new_category = changes.get("id_categorias")
        if new_category is not None:
            await self._ensure_category(new_category)

        updated = await self._recipes.update(existing.id, changes)
        if updated is None:
            raise NotFoundError(RECIPE, existing.id)
        logger.info(
            "Recipe updated",
            recipe_id=existing.id,
            owner_id=existing.id_usuarios,
            fields=sorted(changes),
        )
        return updated

    async def delete(self, recipe_id: int, owner_id: int) -> None:
        """Delete a recipe.

        Raises:
            NotFoundError: Unknown recipe.
            ForbiddenError: ``owner_id`` does not own the recipe.
        """
        await self.check_owner(recipe_id, owner_id, DELETE_FORBIDDEN_MESSAGE)
        if not await self._recipes.delete(recipe_id):
            raise NotFoundError(RECIPE, recipe_id)
        logger.info("Recipe deleted", recipe_id=recipe_id, owner_id=owner_id)

    # =========================================================================
    # Checks
    # =========================================================================

    async def _ensure_category(self, category_id: int) -> None:
        if await self._categories.find_by_id(category_id) is None:
            raise NotFoundError(CATEGORY, category_id)

    async def check_owner(
        self,
        recipe_id: int,
        owner_id: int,
        forbidden_message: str = EDIT_FORBIDDEN_MESSAGE,
    ) -> RecipeView:
        """Load the recipe and make sure ``owner_id`` owns it.

        Raises:
            NotFoundError: Unknown recipe.
            ForbiddenError: Someone else owns it.
        """
        existing = await self.get_by_id(recipe_id)
        if existing.id_usuarios != owner_id:
            raise ForbiddenError(
                forbidden_message,
                recipe_id=recipe_id,
                owner_id=existing.id_usuarios,
                user_id=owner_id,
            )
        return existing
