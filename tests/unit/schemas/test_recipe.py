"""Unit tests for recipe request schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.recipe import RecipeCreate, RecipeFilters, RecipeUpdate


pytestmark = pytest.mark.unit

VALID_CREATE = {
    "nome": "Bolo de cenoura",
    "modo_preparo": "Bata tudo e asse por 40 minutos.",
    "ingredientes": "3 cenouras, 4 ovos, farinha",
}


class TestRecipeCreate:
    """Tests for RecipeCreate."""

    def test_valid(self) -> None:
        recipe = RecipeCreate(**VALID_CREATE, porcoes=8)

        assert recipe.porcoes == 8
        assert recipe.id_categorias is None

    def test_ignores_owner_field(self) -> None:
        """Should drop a client-supplied owner."""
        recipe = RecipeCreate(**VALID_CREATE, id_usuarios=99)

        assert "id_usuarios" not in recipe.model_dump()

    @pytest.mark.parametrize(
        "override",
        [
            {"nome": "ab"},
            {"modo_preparo": "curto"},
            {"ingredientes": "pouco"},
            {"porcoes": 0},
            {"tempo_preparo_minutos": -1},
            {"id_categorias": 0},
        ],
    )
    def test_rejects_invalid_fields(self, override: dict) -> None:
        with pytest.raises(ValidationError):
            RecipeCreate(**{**VALID_CREATE, **override})

    def test_requires_text_fields(self) -> None:
        with pytest.raises(ValidationError):
            RecipeCreate(nome="Bolo de cenoura")


class TestRecipeUpdate:
    """Tests for RecipeUpdate."""

    def test_rejects_empty_body(self) -> None:
        with pytest.raises(ValidationError, match="At least one field"):
            RecipeUpdate()

    def test_rejects_null_required_column(self) -> None:
        with pytest.raises(ValidationError, match="nome cannot be null"):
            RecipeUpdate(nome=None)

    def test_changes_only_sent_fields(self) -> None:
        update = RecipeUpdate(porcoes=4, id_categorias=None)

        assert update.changes() == {"porcoes": 4, "id_categorias": None}

    def test_only_unknown_fields_is_empty(self) -> None:
        """Unknown keys are ignored, leaving nothing to update."""
        with pytest.raises(ValidationError):
            RecipeUpdate.model_validate({"id_usuarios": 5})


class TestRecipeFilters:
    """Tests for RecipeFilters.search_term."""

    @pytest.mark.parametrize(
        ("termo", "expected"),
        [(None, None), ("", None), ("   ", None), ("  bolo ", "bolo")],
    )
    def test_search_term(self, termo: str | None, expected: str | None) -> None:
        assert RecipeFilters(termo_busca=termo).search_term == expected
