"""API unit test fixtures: the real app with a mocked container."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from app.core.config import Settings


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_conn() -> AsyncMock:
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=1)
    return conn


@pytest.fixture
def mock_container(mock_conn: AsyncMock) -> MagicMock:
    """Container whose pool answers ``SELECT 1`` through ``mock_conn``."""
    container = MagicMock()
    container.pool.acquire = MagicMock(return_value=AsyncMock())
    container.pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_conn)
    container.pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)
    return container


@pytest.fixture
def app(test_settings: Settings, mock_container: MagicMock) -> FastAPI:
    return create_app(test_settings, container=mock_container)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
