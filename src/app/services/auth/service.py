"""Registration and login.

Passwords are stored as bcrypt hashes; successful register/login return the
public user (never the hash) together with a fresh access token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from app.auth.jwt import create_access_token
from app.auth.passwords import hash_password, verify_password
from app.core.exceptions import ConflictError, UnauthorizedError
from app.observability.logging import get_logger
from app.schemas.user import AuthResult, UserPublic


if TYPE_CHECKING:
    from app.core.config import Settings
    from app.database.repositories.user import UserRepository
    from app.schemas.user import LoginRequest, RegisterRequest, User


logger = get_logger(__name__)

LOGIN_TAKEN_MESSAGE = "This login is already in use"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    """Creates accounts and exchanges credentials for access tokens."""

    def __init__(self, users: UserRepository, settings: Settings) -> None:
        self._users = users
        self._settings = settings

    async def register(self, data: RegisterRequest) -> AuthResult:
        """Create an account.

        Raises:
            ConflictError: The login is already taken.
        """
        if await self._users.find_by_login(data.login) is not None:
            raise ConflictError(LOGIN_TAKEN_MESSAGE, login=data.login)

        password_hash = await hash_password(
            data.senha, rounds=self._settings.auth.bcrypt_rounds
        )
        try:
            user = await self._users.create(data.nome, data.login, password_hash)
        except asyncpg.UniqueViolationError:
            raise ConflictError(LOGIN_TAKEN_MESSAGE, login=data.login) from None

        logger.info("User registered", user_id=user.id)
        return self._issue(user)

    async def login(self, data: LoginRequest) -> AuthResult:
        """Check credentials.

        Raises:
            UnauthorizedError: Unknown login or wrong password (same message).
        """
        user = await self._users.find_by_login(data.login)
        if user is None or not await verify_password(data.senha, user.senha):
            logger.warning("Failed login attempt", login=data.login)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("User logged in", user_id=user.id)
        return self._issue(user)

    def _issue(self, user: User) -> AuthResult:
        token = create_access_token(user.id, user.login, self._settings)
        usuario = UserPublic(**user.model_dump(exclude={"senha"}))
        return AuthResult(usuario=usuario, token=token)
