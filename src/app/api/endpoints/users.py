"""User listing endpoint."""

from typing import Any

from fastapi import APIRouter, Request, Response

from app.api.dependencies import UserServiceDep
from app.core.rate_limit import limit_default
from app.schemas.envelope import Envelope, success
from app.schemas.user import UserListItem


router = APIRouter(prefix="/usuarios", tags=["usuarios"])


@router.get("", response_model=Envelope[list[UserListItem]], summary="List users")
@limit_default
async def list_users(
    request: Request,
    response: Response,
    service: UserServiceDep,
) -> dict[str, Any]:
    """Return every user as ``{id, nome}``."""
    return success(await service.get_all_users())
