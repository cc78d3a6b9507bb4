"""Default catalog data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)


DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Bolos e tortas doces",
    "Carnes",
    "Aves",
    "Peixes e frutos do mar",
    "Saladas, molhos e acompanhamentos",
    "Sopas",
    "Massas",
    "Bebidas",
    "Doces e sobremesas",
    "Lanches",
    "Prato Único",
    "Light",
    "Alimentação Saudável",
    "Vegetariano",
    "Vegano",
)


async def seed_categories(
    pool: Pool, names: tuple[str, ...] = DEFAULT_CATEGORIES
) -> None:
    """Insert the default categories, leaving existing names untouched."""
    async with pool.acquire() as conn:
        await conn.executemany(
            "INSERT INTO categorias (nome) VALUES ($1) ON CONFLICT (nome) DO NOTHING",
            [(name,) for name in names],
        )
    logger.info("Seeded default categories", count=len(names))
