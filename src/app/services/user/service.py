"""User listing service."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from app.database.repositories.user import UserRepository
    from app.schemas.user import UserListItem


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def get_all_users(self) -> list[UserListItem]:
        return await self._repository.find_all()
