"""The uniform ``{status, data?, message?, meta?}`` response wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer

from app.schemas.base import CamelResponse


if TYPE_CHECKING:
    from app.schemas.pagination import Page


T = TypeVar("T")


class PaginationMeta(CamelResponse):
    """``meta`` block of a paginated response."""

    page: int
    page_size: int
    total_items: int
    total_pages: int


class Envelope(BaseModel, Generic[T]):
    """Success envelope; keys that were never set are left out of the JSON."""

    status: Literal["success"] = "success"
    data: T | None = None
    message: str | None = None
    meta: PaginationMeta | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        return {
            key: value
            for key, value in dumped.items()
            if key == "status" or key in self.model_fields_set
        }


def success(data: Any = None, message: str | None = None) -> dict[str, Any]:
    """Build envelope fields for a plain success response."""
    body: dict[str, Any] = {"status": "success", "data": data}
    if message is not None:
        body["message"] = message
    return body


def paginated(page: Page[Any]) -> dict[str, Any]:
    """Build envelope fields for a page of results."""
    return {
        "status": "success",
        "data": page.data,
        "meta": PaginationMeta(
            page=page.page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
        ),
    }
