"""Service unit test fixtures: AsyncMock repositories."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_user_repository() -> AsyncMock:
    """Create a mock UserRepository."""
    repository = AsyncMock()
    repository.find_by_login.return_value = None
    return repository


@pytest.fixture
def mock_category_repository() -> AsyncMock:
    """Create a mock CategoryRepository."""
    repository = AsyncMock()
    repository.find_by_id.return_value = None
    repository.find_by_name.return_value = None
    return repository


@pytest.fixture
def mock_recipe_repository() -> AsyncMock:
    """Create a mock RecipeRepository."""
    return AsyncMock()
