"""Category endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Path, Request, Response, status

from app.api.dependencies import CategoryServiceDep
from app.auth.dependencies import CurrentUser
from app.core.rate_limit import limit_default
from app.schemas.category import Category, CategoryWrite
from app.schemas.envelope import Envelope, success


router = APIRouter(prefix="/categorias", tags=["categorias"])

CategoryId = Annotated[int, Path(gt=0, description="Category id")]


@router.get("", response_model=Envelope[list[Category]], summary="List categories")
@limit_default
async def list_categories(
    request: Request,
    response: Response,
    service: CategoryServiceDep,
) -> dict[str, Any]:
    return success(await service.get_all())


@router.get(
    "/{category_id}",
    response_model=Envelope[Category],
    summary="Get a category",
    responses={404: {"description": "Category not found"}},
)
@limit_default
async def get_category(
    request: Request,
    response: Response,
    category_id: CategoryId,
    service: CategoryServiceDep,
) -> dict[str, Any]:
    return success(await service.get_by_id(category_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[Category],
    summary="Create a category",
    responses={409: {"description": "Name already in use"}},
)
@limit_default
async def create_category(
    request: Request,
    response: Response,
    body: CategoryWrite,
    service: CategoryServiceDep,
    _user: CurrentUser,
) -> dict[str, Any]:
    category = await service.create(body.nome)
    return success(category, "Category created successfully")


@router.put(
    "/{category_id}",
    response_model=Envelope[Category],
    summary="Rename a category",
    responses={
        404: {"description": "Category not found"},
        409: {"description": "Name already in use"},
    },
)
@limit_default
async def update_category(
    request: Request,
    response: Response,
    category_id: CategoryId,
    body: CategoryWrite,
    service: CategoryServiceDep,
    _user: CurrentUser,
) -> dict[str, Any]:
    category = await service.update(category_id, body.nome)
    return success(category, "Category updated successfully")


@router.delete(
    "/{category_id}",
    response_model=Envelope[Category],
    summary="Delete a category",
    description="Recipes in the category are kept and lose their category.",
    responses={404: {"description": "Category not found"}},
)
@limit_default
async def delete_category(
    request: Request,
    response: Response,
    category_id: CategoryId,
    service: CategoryServiceDep,
    _user: CurrentUser,
) -> dict[str, Any]:
    deleted = await service.delete(category_id)
    return success(deleted, "Category deleted successfully")
