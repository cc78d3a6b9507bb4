"""Unit tests for application errors and their HTTP rendering.

Tests cover:
- ErrorKind to status code mapping
- Error subclasses and their messages
- Handlers registered by setup_exception_handlers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from app.core.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
    _validation_errors,
    error_envelope,
    setup_exception_handlers,
    status_code_for,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


pytestmark = pytest.mark.unit


class Body(BaseModel):
    nome: str = Field(min_length=3)


@pytest.fixture
def app() -> FastAPI:
    """App whose routes raise each kind of failure."""
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found() -> None:
        raise NotFoundError("Recipe", 9)

    @app.get("/unauthorized")
    async def unauthorized() -> None:
        raise UnauthorizedError

    @app.get("/conflict")
    async def conflict() -> None:
        raise ConflictError("This login is already in use", login="ana")

    @app.get("/validation")
    async def validation() -> None:
        raise AppError(
            ErrorKind.VALIDATION, "Invalid data", errors={"nome": "too short"}
        )

    @app.get("/boom")
    async def boom() -> None:
        msg = "database password is hunter2"
        raise RuntimeError(msg)

    @app.post("/items/{item_id}")
    async def create_item(item_id: int, body: Body) -> dict:
        return {"id": item_id, "nome": body.nome}

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


class TestStatusCodeFor:
    """Tests for status_code_for function."""

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (ErrorKind.VALIDATION, 400),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.FORBIDDEN, 403),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.CONFLICT, 409),
            (ErrorKind.RATE_LIMITED, 429),
        ],
    )
    def test_maps_every_kind(self, kind: ErrorKind, expected: int) -> None:
        """Should map each error kind to its HTTP status."""
        assert status_code_for(kind) == expected


class TestErrorClasses:
    """Tests for AppError subclasses."""

    def test_not_found_message(self) -> None:
        """Should name the missing resource."""
        error = NotFoundError("Category", 3)

        assert error.message == "Category not found"
        assert error.status_code == 404
        assert error.context == {"resource": "Category", "identifier": 3}

    def test_forbidden_keeps_context(self) -> None:
        """Should keep structured context for logging only."""
        error = ForbiddenError("nope", recipe_id=1)

        assert error.kind is ErrorKind.FORBIDDEN
        assert error.context == {"recipe_id": 1}

    def test_defaults(self) -> None:
        """Should provide client-safe default messages."""
        assert UnauthorizedError().message == "Invalid credentials"
        assert RateLimitError().status_code == 429

    def test_is_exception(self) -> None:
        """Should be raisable and carry the message."""
        with pytest.raises(AppError, match="boom"):
            raise ConflictError("boom")


class TestErrorEnvelope:
    """Tests for error_envelope function."""

    def test_without_errors(self) -> None:
        assert error_envelope("Nope") == {"status": "error", "message": "Nope"}

    def test_with_errors(self) -> None:
        assert error_envelope("Invalid data", {"nome": "required"}) == {
            "status": "error",
            "message": "Invalid data",
            "errors": {"nome": "required"},
        }


class TestHandlers:
    """Tests for the registered exception handlers."""

    async def test_app_error(self, client: AsyncClient) -> None:
        """Should render the kind's status and message."""
        response = await client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Recipe not found"}

    async def test_unauthorized_sets_challenge(self, client: AsyncClient) -> None:
        """Should add WWW-Authenticate to 401 responses."""
        response = await client.get("/unauthorized")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_context_not_leaked(self, client: AsyncClient) -> None:
        """Should keep log context out of the response body."""
        response = await client.get("/conflict")

        assert response.status_code == 409
        assert "login" not in response.json()

    async def test_validation_error_with_fields(self, client: AsyncClient) -> None:
        """Should include the field errors."""
        response = await client.get("/validation")

        assert response.status_code == 400
        assert response.json()["errors"] == {"nome": "too short"}

    async def test_request_validation_becomes_400(self, client: AsyncClient) -> None:
        """Should turn FastAPI validation failures into 400 with field errors."""
        response = await client.post("/items/abc", json={"nome": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Invalid data"
        assert set(body["errors"]) == {"item_id", "nome"}

    async def test_malformed_json_keyed_as_body(self, client: AsyncClient) -> None:
        """Should key a JSON decode failure as body, not by character offset."""
        response = await client.post(
            "/items/1",
            content=b'{"nome": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert list(response.json()["errors"]) == ["body"]

    async def test_unknown_route(self, client: AsyncClient) -> None:
        """Should wrap starlette 404s in the error envelope."""
        response = await client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Not Found"}

    async def test_method_not_allowed(self, client: AsyncClient) -> None:
        """Should wrap 405s in the error envelope."""
        response = await client.delete("/not-found")

        assert response.status_code == 405
        assert response.json()["status"] == "error"

    async def test_unhandled_error_is_opaque(self, client: AsyncClient) -> None:
        """Should answer 500 with a static message and no internals."""
        response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": INTERNAL_ERROR_MESSAGE}
        assert "hunter2" not in response.text


class TestValidationErrors:
    """Tests for _validation_errors function."""

    def test_strips_location(self) -> None:
        exc = RequestValidationError(
            [
                {"loc": ("body", "nome"), "msg": "too short", "type": "too_short"},
                {"loc": ("query", "page"), "msg": "not int", "type": "int_parsing"},
            ]
        )

        assert _validation_errors(exc) == {"nome": "too short", "page": "not int"}

    def test_nested_field(self) -> None:
        exc = RequestValidationError(
            [{"loc": ("body", "tags", 0), "msg": "bad", "type": "string_type"}]
        )

        assert _validation_errors(exc) == {"tags.0": "bad"}

    @pytest.mark.parametrize("loc", [("body", 12), (), ("body",)])
    def test_positional_or_empty_location(self, loc: tuple) -> None:
        """Should fall back to body when no field name is available."""
        exc = RequestValidationError(
            [{"loc": loc, "msg": "JSON decode error", "type": "json_invalid"}]
        )

        assert _validation_errors(exc) == {"body": "JSON decode error"}

    def test_first_message_wins(self) -> None:
        exc = RequestValidationError(
            [
                {"loc": ("body", "nome"), "msg": "first", "type": "a"},
                {"loc": ("body", "nome"), "msg": "second", "type": "b"},
            ]
        )

        assert _validation_errors(exc) == {"nome": "first"}
