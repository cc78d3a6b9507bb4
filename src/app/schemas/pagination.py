"""Page arithmetic and the paginated result container."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, computed_field


T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Normalized page coordinates: ``page >= 1`` and ``1 <= page_size <= max``."""

    page: int
    page_size: int

    @classmethod
    def build(
        cls,
        page: int | None = 1,
        page_size: int | None = DEFAULT_PAGE_SIZE,
        *,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> PageRequest:
        """Clamp the requested coordinates; oversize pages are cut, not rejected."""
        page = max(page or 1, 1)
        size = page_size or DEFAULT_PAGE_SIZE
        return cls(page=page, page_size=min(max(size, 1), max_page_size))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class Page(BaseModel, Generic[T]):
    """One page of results plus the counts needed to navigate the rest."""

    data: list[T]
    page: int
    page_size: int
    total_items: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size) if self.page_size else 0

    @classmethod
    def of(cls, data: list[T], request: PageRequest, total_items: int) -> Page[T]:
        return cls(
            data=data,
            page=request.page,
            page_size=request.page_size,
            total_items=total_items,
        )
