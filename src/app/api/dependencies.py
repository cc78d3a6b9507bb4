"""FastAPI dependencies for service access.

Services live in the :class:`~app.core.container.ServiceContainer` attached to
``app.state`` during startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, HTTPException, Query, Request, status

from app.schemas.pagination import PageRequest
from app.services.auth import AuthService
from app.services.category import CategoryService
from app.services.recipe import RecipeService
from app.services.user import UserService


if TYPE_CHECKING:
    from app.core.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return the service container.

    Raises:
        HTTPException: 503 if startup has not completed.
    """
    container: ServiceContainer | None = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not available",
        )
    return container


def get_auth_service(request: Request) -> AuthService:
    return get_container(request).auth


def get_user_service(request: Request) -> UserService:
    return get_container(request).users


def get_category_service(request: Request) -> CategoryService:
    return get_container(request).categories


def get_recipe_service(request: Request) -> RecipeService:
    return get_container(request).recipes


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]


def get_page_request(
    request: Request,
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    page_size: Annotated[
        int | None,
        Query(alias="pageSize", ge=1, description="Items per page (capped at the maximum)"),
    ] = None,
) -> PageRequest:
    """Read ``page``/``pageSize``; sizes above the maximum are clamped, not rejected."""
    bounds = request.app.state.settings.pagination
    return PageRequest.build(
        page,
        page_size or bounds.default_page_size,
        max_page_size=bounds.max_page_size,
    )


Pagination = Annotated[PageRequest, Depends(get_page_request)]
