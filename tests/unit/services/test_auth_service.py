"""Unit tests for AuthService.

Tests cover:
- Registration (hashing, login uniqueness, token issue)
- Login (uniform failure message)
- The public user never carrying the password hash
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import asyncpg
import pytest

from app.auth.jwt import decode_token
from app.auth.passwords import hash_password
from app.core.config import Settings
from app.core.exceptions import ConflictError, UnauthorizedError
from app.schemas.user import LoginRequest, RegisterRequest
from app.services.auth import AuthService
from app.services.auth.service import INVALID_CREDENTIALS_MESSAGE, LOGIN_TAKEN_MESSAGE
from tests.factories.models import UserFactory


pytestmark = pytest.mark.unit


@pytest.fixture
def service(mock_user_repository: AsyncMock, test_settings: Settings) -> AuthService:
    """Create service with mock repository."""
    return AuthService(mock_user_repository, test_settings)


@pytest.fixture
def register_request() -> RegisterRequest:
    return RegisterRequest(nome="Ana Souza", login="ana@example.com", senha="segredo123")


class TestRegister:
    """Tests for register method."""

    async def test_creates_user_with_hashed_password(
        self,
        service: AuthService,
        mock_user_repository: AsyncMock,
        register_request: RegisterRequest,
    ) -> None:
        """Should store a bcrypt hash, never the plain password."""
        mock_user_repository.create.return_value = UserFactory.build(id=1)

        await service.register(register_request)

        nome, login, password_hash = mock_user_repository.create.call_args.args
        assert (nome, login) == ("Ana Souza", "ana@example.com")
        assert password_hash != "segredo123"
        assert password_hash.startswith("$2b$04$")

    async def test_returns_user_and_valid_token(
        self,
        service: AuthService,
        mock_user_repository: AsyncMock,
        register_request: RegisterRequest,
        test_settings: Settings,
    ) -> None:
        """Should return the public user and a token for that user."""
        mock_user_repository.create.return_value = UserFactory.build(
            id=1, login="ana@example.com"
        )

        result = await service.register(register_request)

        assert result.usuario.id == 1
        assert "senha" not in result.usuario.model_dump()
        payload = decode_token(result.token, test_settings)
        assert (payload.id, payload.login) == (1, "ana@example.com")

    async def test_rejects_taken_login(
        self,
        service: AuthService,
        mock_user_repository: AsyncMock,
        register_request: RegisterRequest,
    ) -> None:
        """Should raise ConflictError without creating a second account."""
        mock_user_repository.find_by_login.return_value = UserFactory.build()

        with pytest.raises(ConflictError, match=LOGIN_TAKEN_MESSAGE):
            await service.register(register_request)

        mock_user_repository.create.assert_not_awaited()

    async def test_maps_unique_violation_to_conflict(
        self,
        service: AuthService,
        mock_user_repository: AsyncMock,
        register_request: RegisterRequest,
    ) -> None:
        """Should report a racing registration as a conflict."""
        mock_user_repository.create.side_effect = asyncpg.UniqueViolationError(
            "duplicate key"
        )

        with pytest.raises(ConflictError, match=LOGIN_TAKEN_MESSAGE):
            await service.register(register_request)

    async def test_uses_configured_cost(
        self,
        service: AuthService,
        mock_user_repository: AsyncMock,
        register_request: RegisterRequest,
    ) -> None:
        """Should hash with the configured bcrypt rounds."""
        mock_user_repository.create.return_value = UserFactory.build(id=1)

        with patch(
            "app.services.auth.service.hash_password",
            new_callable=AsyncMock,
            return_value="hashed",
        ) as mock_hash:
            await service.register(register_request)

        mock_hash.assert_awaited_once_with("segredo123", rounds=4)


class TestLogin:
    """Tests for login method."""

    async def test_valid_credentials(
        self, service: AuthService, mock_user_repository: AsyncMock
    ) -> None:
        """Should return the user and a token."""
        stored = UserFactory.build(
            id=5,
            login="ana@example.com",
            senha=await hash_password("segredo123", rounds=4),
        )
        mock_user_repository.find_by_login.return_value = stored

        result = await service.login(
            LoginRequest(login="ana@example.com", senha="segredo123")
        )

        assert result.usuario.id == 5
        assert result.token

    async def test_wrong_password(
        self, service: AuthService, mock_user_repository: AsyncMock
    ) -> None:
        """Should raise UnauthorizedError for a wrong password."""
        mock_user_repository.find_by_login.return_value = UserFactory.build(
            senha=await hash_password("segredo123", rounds=4)
        )

        with pytest.raises(UnauthorizedError, match=INVALID_CREDENTIALS_MESSAGE):
            await service.login(LoginRequest(login="ana@example.com", senha="errada1"))

    async def test_unknown_login_same_message(self, service: AuthService) -> None:
        """Should not reveal whether the login exists."""
        with pytest.raises(UnauthorizedError, match=INVALID_CREDENTIALS_MESSAGE):
            await service.login(LoginRequest(login="nobody", senha="segredo123"))
