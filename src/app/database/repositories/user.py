"""User data repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.observability.logging import get_logger
from app.schemas.user import User, UserListItem


if TYPE_CHECKING:
    from asyncpg import Pool, Record

logger = get_logger(__name__)


_USER_COLUMNS = "id, nome, login, senha, criado_em, alterado_em"


class UserRepository:
    """Raw asyncpg access to ``usuarios``."""

    def __init__(self, pool: Pool) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        return self._pool

    async def find_by_id(self, user_id: int) -> User | None:
        query = f"SELECT {_USER_COLUMNS} FROM usuarios WHERE id = $1"
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, user_id)
        return self._row_to_user(row) if row else None

    async def find_by_login(self, login: str) -> User | None:
        query = f"SELECT {_USER_COLUMNS} FROM usuarios WHERE login = $1"
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, login)
        return self._row_to_user(row) if row else None

    async def find_all(self) -> list[UserListItem]:
        """List every user as ``{id, nome}``."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, nome FROM usuarios ORDER BY id")
        return [UserListItem(id=row["id"], nome=row["nome"]) for row in rows]

    async def create(self, nome: str, login: str, password_hash: str) -> User:
        """Insert a user; raises ``asyncpg.UniqueViolationError`` on a taken login."""
        query = f"""
            INSERT INTO usuarios (nome, login, senha, criado_em, alterado_em)
            VALUES ($1, $2, $3, NOW(), NOW())
            RETURNING {_USER_COLUMNS}
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, nome, login, password_hash)
        return self._row_to_user(row)

    @staticmethod
    def _row_to_user(row: Record) -> User:
        return User(
            id=row["id"],
            nome=row["nome"],
            login=row["login"],
            senha=row["senha"],
            criado_em=row["criado_em"],
            alterado_em=row["alterado_em"],
        )
