"""Category record and request body."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from app.schemas.base import APIRequest, Record


class Category(Record):
    """Row of ``categorias``; also the shape nested inside a recipe."""

    id: int
    nome: str


class CategoryWrite(APIRequest):
    """Body of ``POST``/``PUT /categorias``."""

    nome: Annotated[str, Field(min_length=3, max_length=100)]
