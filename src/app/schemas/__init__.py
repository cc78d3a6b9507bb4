"""Pydantic schemas for request/response validation.

This module exports the schema classes of the recipe catalog API.
"""

from app.schemas.base import APIRequest, APIResponse, CamelResponse, Record
from app.schemas.category import Category, CategoryWrite
from app.schemas.envelope import Envelope, PaginationMeta, paginated, success
from app.schemas.health import DetailedHealthResponse, HealthResponse
from app.schemas.pagination import Page, PageRequest
from app.schemas.recipe import (
    Recipe,
    RecipeCreate,
    RecipeFilters,
    RecipeUpdate,
    RecipeView,
)
from app.schemas.root import RootResponse
from app.schemas.user import (
    AuthResult,
    LoginRequest,
    Principal,
    RegisterRequest,
    User,
    UserListItem,
    UserPublic,
    UserSummary,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "AuthResult",
    "CamelResponse",
    "Category",
    "CategoryWrite",
    "DetailedHealthResponse",
    "Envelope",
    "HealthResponse",
    "LoginRequest",
    "Page",
    "PageRequest",
    "PaginationMeta",
    "Principal",
    "Recipe",
    "RecipeCreate",
    "RecipeFilters",
    "RecipeUpdate",
    "RecipeView",
    "RegisterRequest",
    "RootResponse",
    "User",
    "UserListItem",
    "UserPublic",
    "UserSummary",
    "paginated",
    "success",
]
