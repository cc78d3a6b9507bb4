"""User records and the user-facing shapes derived from them.

Only :class:`User` carries the password hash; every shape that can reach a
client is a separate model without that field.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from app.schemas.base import APIRequest, APIResponse, Record


NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
LOGIN_MIN_LENGTH = 3
LOGIN_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


class User(Record):
    """Row of ``usuarios``."""

    id: int
    nome: str
    login: str
    senha: str
    criado_em: datetime | None = None
    alterado_em: datetime | None = None


class UserPublic(APIResponse):
    """User as returned by register/login."""

    id: int
    nome: str
    login: str
    criado_em: datetime | None = None
    alterado_em: datetime | None = None


class UserSummary(APIResponse):
    """Owner nested inside a recipe."""

    id: int
    nome: str
    login: str


class UserListItem(APIResponse):
    """Entry of ``GET /usuarios``."""

    id: int
    nome: str


class RegisterRequest(APIRequest):
    """Body of ``POST /auth/register``."""

    nome: Annotated[str, Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)]
    login: Annotated[
        str, Field(min_length=LOGIN_MIN_LENGTH, max_length=LOGIN_MAX_LENGTH)
    ]
    senha: Annotated[
        str,
        Field(
            min_length=PASSWORD_MIN_LENGTH,
            max_length=PASSWORD_MAX_LENGTH,
            pattern=r"^[a-zA-Z0-9]+$",
        ),
    ]


class LoginRequest(APIRequest):
    """Body of ``POST /auth/login``."""

    login: Annotated[
        str, Field(min_length=LOGIN_MIN_LENGTH, max_length=LOGIN_MAX_LENGTH)
    ]
    senha: Annotated[
        str, Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    ]


class AuthResult(APIResponse):
    """Payload of a successful register/login."""

    usuario: UserPublic
    token: str


class Principal(APIResponse):
    """Identity carried by an access token (``GET /auth/me``)."""

    id: int
    login: str
