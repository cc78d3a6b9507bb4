"""Recipe write-side records, the hydrated read view, and request bodies."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, PositiveInt, model_validator

from app.schemas.base import APIRequest, Record
from app.schemas.category import Category
from app.schemas.user import UserSummary


RecipeName = Annotated[str, Field(min_length=3, max_length=255)]
RecipeText = Annotated[str, Field(min_length=10)]

_REQUIRED_COLUMNS = frozenset({"nome", "modo_preparo", "ingredientes"})


class Recipe(Record):
    """Row of ``receitas``."""

    id: int
    id_usuarios: int
    id_categorias: int | None = None
    nome: str
    tempo_preparo_minutos: int | None = None
    porcoes: int | None = None
    modo_preparo: str
    ingredientes: str
    criado_em: datetime | None = None
    alterado_em: datetime | None = None


class RecipeView(Recipe):
    """Recipe with its owner and category hydrated from joined columns."""

    usuario: UserSummary | None = None
    categoria: Category | None = None


class RecipeCreate(APIRequest):
    """Body of ``POST /receitas``; the owner comes from the access token."""

    id_categorias: PositiveInt | None = None
    nome: RecipeName
    tempo_preparo_minutos: PositiveInt | None = None
    porcoes: PositiveInt | None = None
    modo_preparo: RecipeText
    ingredientes: RecipeText


class RecipeUpdate(APIRequest):
    """Body of ``PUT /receitas/{id}``.

    Only fields present in the request are written; sending
    ``"id_categorias": null`` detaches the recipe from its category.
    """

    id_categorias: PositiveInt | None = None
    nome: RecipeName | None = None
    tempo_preparo_minutos: PositiveInt | None = None
    porcoes: PositiveInt | None = None
    modo_preparo: RecipeText | None = None
    ingredientes: RecipeText | None = None

    @model_validator(mode="after")
    def _require_one_field(self) -> RecipeUpdate:
        if not self.model_fields_set:
            msg = "At least one field must be provided for update"
            raise ValueError(msg)
        for name in _REQUIRED_COLUMNS & self.model_fields_set:
            if getattr(self, name) is None:
                msg = f"{name} cannot be null"
                raise ValueError(msg)
        return self

    def changes(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        return self.model_dump(exclude_unset=True)


class RecipeFilters(Record):
    """Search criteria; absent filters add no predicate."""

    termo_busca: str | None = None
    id_usuarios: int | None = None
    id_categorias: int | None = None
    page: int = 1
    page_size: int = 10

    @property
    def search_term(self) -> str | None:
        """Stripped search term, or None when blank."""
        if self.termo_busca is None:
            return None
        return self.termo_busca.strip() or None
