"""Recipe data repository.

Paginated reads run two statements built from one :class:`RecipeQuery`: a
``COUNT(*)`` and the page itself. Both render the same FROM/JOIN/WHERE, so
the reported total always describes the predicate that selected the rows.
The two statements are not wrapped in a transaction; under concurrent writes
``total_items`` may be stale relative to the page and is advisory only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.observability.logging import get_logger
from app.schemas.category import Category
from app.schemas.pagination import MAX_PAGE_SIZE, Page, PageRequest
from app.schemas.recipe import RecipeView
from app.schemas.user import UserSummary


if TYPE_CHECKING:
    from collections.abc import Mapping

    from asyncpg import Pool

    from app.schemas.recipe import RecipeCreate, RecipeFilters

logger = get_logger(__name__)


# =============================================================================
# Query building
# =============================================================================

_RECIPE_COLUMNS = (
    "r.id",
    "r.id_usuarios",
    "r.id_categorias",
    "r.nome",
    "r.tempo_preparo_minutos",
    "r.porcoes",
    "r.modo_preparo",
    "r.ingredientes",
    "r.criado_em",
    "r.alterado_em",
)
_OWNER_COLUMNS = ("u.nome AS usuario_nome", "u.login AS usuario_login")
_CATEGORY_COLUMNS = ("c.nome AS categoria_nome",)

_OWNER_JOIN = "INNER JOIN usuarios u ON u.id = r.id_usuarios"
_CATEGORY_JOIN = "LEFT JOIN categorias c ON c.id = r.id_categorias"

_TEXT_MATCH = (
    "(r.nome ILIKE {param} OR r.ingredientes ILIKE {param} "
    "OR r.modo_preparo ILIKE {param})"
)

# Columns a client may change; id, owner and timestamps are never writable.
WRITABLE_COLUMNS = (
    "id_categorias",
    "nome",
    "tempo_preparo_minutos",
    "porcoes",
    "modo_preparo",
    "ingredientes",
)


def escape_like(term: str) -> str:
    """Escape LIKE metacharacters so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecipeQuery:
    """Filtered ``receitas`` query rendered as a count, a page, or a lookup.

    Args:
        with_owner: Inner-join ``usuarios`` and hydrate ``usuario``.
        with_category: Left-join ``categorias`` and hydrate ``categoria``.
    """

    def __init__(self, *, with_owner: bool = True, with_category: bool = True) -> None:
        self.with_owner = with_owner
        self.with_category = with_category
        self.args: list[Any] = []
        self._conditions: list[str] = []

    def where(self, template: str, value: Any) -> RecipeQuery:
        """Add a predicate; ``{param}`` in the template becomes the placeholder."""
        self.args.append(value)
        self._conditions.append(template.format(param=f"${len(self.args)}"))
        return self

    @property
    def conditions(self) -> tuple[str, ...]:
        return tuple(self._conditions)

    def _from_clause(self) -> str:
        parts = ["FROM receitas r"]
        if self.with_owner:
            parts.append(_OWNER_JOIN)
        if self.with_category:
            parts.append(_CATEGORY_JOIN)
        if self._conditions:
            parts.append("WHERE " + " AND ".join(self._conditions))
        return " ".join(parts)

    def _select_list(self) -> str:
        columns = list(_RECIPE_COLUMNS)
        if self.with_owner:
            columns.extend(_OWNER_COLUMNS)
        if self.with_category:
            columns.extend(_CATEGORY_COLUMNS)
        return ", ".join(columns)

    def select_sql(self) -> str:
        return f"SELECT {self._select_list()} {self._from_clause()}"

    def count_sql(self) -> str:
        return f"SELECT COUNT(*) {self._from_clause()}"

    def page_sql(self, request: PageRequest) -> tuple[str, list[Any]]:
        """Return the page statement and its arguments (filters, limit, offset)."""
        limit = len(self.args) + 1
        sql = (
            f"{self.select_sql()} ORDER BY r.id "
            f"LIMIT ${limit} OFFSET ${limit + 1}"
        )
        return sql, [*self.args, request.page_size, request.offset]


def project_recipe(
    row: Mapping[str, Any],
    *,
    with_owner: bool,
    with_category: bool,
) -> RecipeView:
    """Turn a joined row into a :class:`RecipeView`.

    The owner summary never includes the password hash; a category is only
    attached when the left join actually matched.
    """
    usuario = None
    if with_owner:
        usuario = UserSummary(
            id=row["id_usuarios"],
            nome=row["usuario_nome"],
            login=row["usuario_login"],
        )

    categoria = None
    if with_category and row["id_categorias"] is not None and row["categoria_nome"] is not None:
        categoria = Category(id=row["id_categorias"], nome=row["categoria_nome"])

    return RecipeView(
        id=row["id"],
        id_usuarios=row["id_usuarios"],
        id_categorias=row["id_categorias"],
        nome=row["nome"],
        tempo_preparo_minutos=row["tempo_preparo_minutos"],
        porcoes=row["porcoes"],
        modo_preparo=row["modo_preparo"],
        ingredientes=row["ingredientes"],
        criado_em=row["criado_em"],
        alterado_em=row["alterado_em"],
        usuario=usuario,
        categoria=categoria,
    )


# =============================================================================
# Repository
# =============================================================================


class RecipeRepository:
    """Raw asyncpg access to ``receitas`` with owner/category hydration."""

    def __init__(self, pool: Pool, max_page_size: int = MAX_PAGE_SIZE) -> None:
        self._pool = pool
        self._max_page_size = max_page_size

    @property
    def pool(self) -> Pool:
        return self._pool

    def page_request(self, page: int | None, page_size: int | None) -> PageRequest:
        return PageRequest.build(page, page_size, max_page_size=self._max_page_size)

    async def find_by_id(self, recipe_id: int) -> RecipeView | None:
        query = RecipeQuery().where("r.id = {param}", recipe_id)
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query.select_sql(), *query.args)
        if row is None:
            return None
        return project_recipe(row, with_owner=True, with_category=True)

    async def find_all(
        self, page: int | None = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        return await self._fetch_page(RecipeQuery(), self.page_request(page, page_size))

    async def find_by_user(
        self, user_id: int, page: int | None = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        query = RecipeQuery(with_owner=False).where("r.id_usuarios = {param}", user_id)
        return await self._fetch_page(query, self.page_request(page, page_size))

    async def find_by_category(
        self, category_id: int, page: int | None = 1, page_size: int | None = None
    ) -> Page[RecipeView]:
        query = RecipeQuery(with_category=False).where(
            "r.id_categorias = {param}", category_id
        )
        return await self._fetch_page(query, self.page_request(page, page_size))

    async def search(self, filters: RecipeFilters) -> Page[RecipeView]:
        """Combine owner, category and text filters; absent ones add nothing."""
        query = RecipeQuery()
        if filters.id_usuarios is not None:
            query.where("r.id_usuarios = {param}", filters.id_usuarios)
        if filters.id_categorias is not None:
            query.where("r.id_categorias = {param}", filters.id_categorias)
        term = filters.search_term
        if term:
            query.where(_TEXT_MATCH, f"%{escape_like(term)}%")
        return await self._fetch_page(
            query, self.page_request(filters.page, filters.page_size)
        )

    async def create(self, data: RecipeCreate, owner_id: int) -> RecipeView:
        """Insert a recipe owned by ``owner_id`` and return it hydrated."""
        query = """
            INSERT INTO receitas (
                id_usuarios, id_categorias, nome, tempo_preparo_minutos,
                porcoes, modo_preparo, ingredientes, criado_em, alterado_em
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, NOW(), NOW())
            RETURNING id
        """
        async with self.pool.acquire() as conn:
            recipe_id = await conn.fetchval(
                query,
                owner_id,
                data.id_categorias,
                data.nome,
                data.tempo_preparo_minutos,
                data.porcoes,
                data.modo_preparo,
                data.ingredientes,
            )
        logger.debug("Inserted recipe", recipe_id=recipe_id, owner_id=owner_id)
        created = await self.find_by_id(recipe_id)
        if created is None:
            msg = f"Recipe {recipe_id} vanished right after insert"
            raise RuntimeError(msg)
        return created

    async def update(
        self, recipe_id: int, changes: Mapping[str, Any]
    ) -> RecipeView | None:
        """Write the provided columns, stamp ``alterado_em``, return the fresh view.

        Returns None when no row has ``recipe_id`` any more.
        """
        values = {k: v for k, v in changes.items() if k in WRITABLE_COLUMNS}
        assignments = [
            f"{column} = ${position}"
            for position, column in enumerate(values, start=1)
        ]
        assignments.append("alterado_em = NOW()")
        query = (
            f"UPDATE receitas SET {', '.join(assignments)} "
            f"WHERE id = ${len(values) + 1} RETURNING id"
        )
        async with self.pool.acquire() as conn:
            updated = await conn.fetchval(query, *values.values(), recipe_id)
        if updated is None:
            return None
        return await self.find_by_id(recipe_id)

    async def delete(self, recipe_id: int) -> bool:
        """Return True when exactly one row was removed."""
        async with self.pool.acquire() as conn:
            status = await conn.execute("DELETE FROM receitas WHERE id = $1", recipe_id)
        return status == "DELETE 1"

    async def _fetch_page(
        self, query: RecipeQuery, request: PageRequest
    ) -> Page[RecipeView]:
        page_sql, page_args = query.page_sql(request)
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(query.count_sql(), *query.args)
            rows = await conn.fetch(page_sql, *page_args)
        items = [
            project_recipe(
                row,
                with_owner=query.with_owner,
                with_category=query.with_category,
            )
            for row in rows
        ]
        return Page.of(items, request, int(total or 0))
