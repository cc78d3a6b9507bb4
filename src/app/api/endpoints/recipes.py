"""Recipe endpoints: paginated listings, search, and owner-only writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.dependencies import Pagination, RecipeServiceDep
from app.auth.dependencies import CurrentUser
from app.core.rate_limit import limit_default, limit_search
from app.schemas.envelope import Envelope, paginated, success
from app.schemas.recipe import RecipeCreate, RecipeFilters, RecipeUpdate, RecipeView


router = APIRouter(prefix="/receitas", tags=["receitas"])

RecipeId = Annotated[int, Path(gt=0, description="Recipe id")]
PositiveIdFilter = Annotated[int | None, Query(gt=0)]


async def require_recipe_owner(
    recipe_id: RecipeId,
    user: CurrentUser,
    service: RecipeServiceDep,
) -> RecipeView:
    """Load the recipe and reject non-owners."""
    return await service.check_owner(recipe_id, user.id)


OwnedRecipe = Annotated[RecipeView, Depends(require_recipe_owner)]


async def recipe_update_body(request: Request, _recipe: OwnedRecipe) -> RecipeUpdate:
    """Decode the PUT body; runs only after the ownership check has passed."""
    raw = await request.body()
    try:
        return RecipeUpdate.model_validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=raw) from None


RecipeUpdateBody = Annotated[RecipeUpdate, Depends(recipe_update_body)]


# =============================================================================
# Reads
# =============================================================================


@router.get(
    "",
    response_model=Envelope[list[RecipeView]],
    summary="List recipes",
)
@limit_default
async def list_recipes(
    request: Request,
    response: Response,
    pagination: Pagination,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    page = await service.get_all(pagination.page, pagination.page_size)
    return paginated(page)


@router.get(
    "/search",
    response_model=Envelope[list[RecipeView]],
    summary="Search recipes",
    description=(
        "Case-insensitive match of `termo_busca` against name, ingredients and "
        "instructions, optionally narrowed by owner and category."
    ),
    responses={404: {"description": "Category not found"}},
)
@limit_search
async def search_recipes(
    request: Request,
    response: Response,
    pagination: Pagination,
    service: RecipeServiceDep,
    termo_busca: Annotated[str | None, Query(max_length=255)] = None,
    id_usuarios: PositiveIdFilter = None,
    id_categorias: PositiveIdFilter = None,
) -> dict[str, Any]:
    filters = RecipeFilters(
        termo_busca=termo_busca,
        id_usuarios=id_usuarios,
        id_categorias=id_categorias,
        page=pagination.page,
        page_size=pagination.page_size,
    )
    return paginated(await service.search(filters))


@router.get(
    "/usuario/{user_id}",
    response_model=Envelope[list[RecipeView]],
    summary="List a user's recipes",
)
@limit_default
async def list_recipes_by_user(
    request: Request,
    response: Response,
    user_id: Annotated[int, Path(gt=0)],
    pagination: Pagination,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    page = await service.get_by_user(user_id, pagination.page, pagination.page_size)
    return paginated(page)


@router.get(
    "/categoria/{category_id}",
    response_model=Envelope[list[RecipeView]],
    summary="List a category's recipes",
    responses={404: {"description": "Category not found"}},
)
@limit_default
async def list_recipes_by_category(
    request: Request,
    response: Response,
    category_id: Annotated[int, Path(gt=0)],
    pagination: Pagination,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    page = await service.get_by_category(
        category_id, pagination.page, pagination.page_size
    )
    return paginated(page)


@router.get(
    "/{recipe_id}",
    response_model=Envelope[RecipeView],
    summary="Get a recipe",
    responses={404: {"description": "Recipe not found"}},
)
@limit_default
async def get_recipe(
    request: Request,
    response: Response,
    recipe_id: RecipeId,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    return success(await service.get_by_id(recipe_id))


# =============================================================================
# Writes
# =============================================================================


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[RecipeView],
    summary="Create a recipe",
    responses={404: {"description": "Category not found"}},
)
@limit_default
async def create_recipe(
    request: Request,
    response: Response,
    body: RecipeCreate,
    user: CurrentUser,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    """Create a recipe owned by the authenticated user."""
    recipe = await service.create(body, user.id)
    return success(recipe, "Recipe created successfully")


@router.put(
    "/{recipe_id}",
    response_model=Envelope[RecipeView],
    summary="Update a recipe",
    responses={
        400: {"description": "Invalid data"},
        403: {"description": "Not the owner"},
        404: {"description": "Recipe or category not found"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": RecipeUpdate.model_json_schema()}
            },
        }
    },
)
@limit_default
async def update_recipe(
    request: Request,
    response: Response,
    recipe: OwnedRecipe,
    body: RecipeUpdateBody,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    """Update the fields present in the body (owner only)."""
    updated = await service.apply_update(recipe, body)
    return success(updated, "Recipe updated successfully")


@router.delete(
    "/{recipe_id}",
    response_model=Envelope[None],
    summary="Delete a recipe",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Recipe not found"},
    },
)
@limit_default
async def delete_recipe(
    request: Request,
    response: Response,
    recipe_id: RecipeId,
    user: CurrentUser,
    service: RecipeServiceDep,
) -> dict[str, Any]:
    await service.delete(recipe_id, user.id)
    return success(None, "Recipe deleted successfully")
