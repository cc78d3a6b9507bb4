"""Database repositories."""

from app.database.repositories.category import CategoryRepository
from app.database.repositories.recipe import RecipeRepository
from app.database.repositories.user import UserRepository


__all__ = ["CategoryRepository", "RecipeRepository", "UserRepository"]
