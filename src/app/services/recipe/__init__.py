"""Recipe catalog service."""

from app.services.recipe.service import RecipeService


__all__ = ["RecipeService"]
