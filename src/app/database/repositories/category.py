"""Category data repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.schemas.category import Category


if TYPE_CHECKING:
    from asyncpg import Pool, Record


class CategoryRepository:
    """Raw asyncpg access to ``categorias``.

    Name uniqueness is checked by the service; the ``uq_categorias_nome``
    constraint surfaces as ``asyncpg.UniqueViolationError`` when two writers
    race past that check.
    """

    def __init__(self, pool: Pool) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        return self._pool

    async def find_all(self) -> list[Category]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, nome FROM categorias ORDER BY id")
        return [self._row_to_category(row) for row in rows]

    async def find_by_id(self, category_id: int) -> Category | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, nome FROM categorias WHERE id = $1", category_id
            )
        return self._row_to_category(row) if row else None

    async def find_by_name(self, nome: str) -> Category | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, nome FROM categorias WHERE nome = $1", nome
            )
        return self._row_to_category(row) if row else None

    async def create(self, nome: str) -> Category:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "INSERT INTO categorias (nome) VALUES ($1) RETURNING id, nome", nome
            )
        return self._row_to_category(row)

    async def update(self, category_id: int, nome: str) -> Category | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "UPDATE categorias SET nome = $1 WHERE id = $2 RETURNING id, nome",
                nome,
                category_id,
            )
        return self._row_to_category(row) if row else None

    async def delete(self, category_id: int) -> Category | None:
        """Delete and return the removed row.

        Recipes referencing the category keep existing with
        ``id_categorias`` set to NULL (``ON DELETE SET NULL``).
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "DELETE FROM categorias WHERE id = $1 RETURNING id, nome", category_id
            )
        return self._row_to_category(row) if row else None

    @staticmethod
    def _row_to_category(row: Record) -> Category:
        return Category(id=row["id"], nome=row["nome"])
