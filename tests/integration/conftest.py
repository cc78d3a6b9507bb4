"""Integration test fixtures.

The full application (middleware, exception handlers, routers, services) is
served through httpx with the repositories swapped for in-memory ones, so
every request runs the same code path as in production down to the SQL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.container import ServiceContainer
from app.factory import create_app
from tests.factories.repositories import InMemoryStore, in_memory_repositories


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import FastAPI

    from app.core.config import Settings


pytestmark = pytest.mark.integration

DEFAULT_PASSWORD = "pw123456"

Headers = dict[str, str]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(test_settings: Settings, store: InMemoryStore) -> ServiceContainer:
    return ServiceContainer.from_repositories(
        test_settings,
        in_memory_repositories(store, test_settings.pagination.max_page_size),
    )


@pytest.fixture
def app(test_settings: Settings, container: ServiceContainer) -> FastAPI:
    return create_app(test_settings, container=container)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Register a user and return the ``data`` of the response."""

    async def _register(
        login: str, nome: str = "Usuário Teste", senha: str = DEFAULT_PASSWORD
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register", json={"nome": nome, "login": login, "senha": senha}
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def auth_headers(
    register: Callable[..., Awaitable[dict[str, Any]]],
) -> Callable[[str], Awaitable[Headers]]:
    """Register ``login`` and return its bearer header."""

    async def _auth_headers(login: str) -> Headers:
        data = await register(login)
        return {"Authorization": f"Bearer {data['token']}"}

    return _auth_headers


@pytest.fixture
async def alice(auth_headers: Callable[[str], Awaitable[Headers]]) -> Headers:
    return await auth_headers("alice@example.com")


@pytest.fixture
async def bob(auth_headers: Callable[[str], Awaitable[Headers]]) -> Headers:
    return await auth_headers("bob@example.com")


@pytest.fixture
def recipe_body() -> Callable[..., dict[str, Any]]:
    def _recipe_body(**overrides: Any) -> dict[str, Any]:
        return {
            "nome": "Bolo de cenoura",
            "tempo_preparo_minutos": 45,
            "porcoes": 8,
            "modo_preparo": "Bata tudo no liquidificador e asse por 40 minutos.",
            "ingredientes": "3 cenouras, 4 ovos, 2 xicaras de farinha",
            **overrides,
        }

    return _recipe_body
