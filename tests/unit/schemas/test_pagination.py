"""Unit tests for page arithmetic."""

from __future__ import annotations

import pytest

from app.schemas.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest


pytestmark = pytest.mark.unit


class TestPageRequest:
    """Tests for PageRequest.build."""

    def test_defaults(self) -> None:
        request = PageRequest.build(None, None)

        assert request.page == 1
        assert request.page_size == DEFAULT_PAGE_SIZE
        assert request.offset == 0

    @pytest.mark.parametrize(
        ("page", "page_size", "expected"),
        [
            (0, 10, (1, 10)),
            (-3, 10, (1, 10)),
            (2, 500, (2, 100)),
            (1, -5, (1, 1)),
        ],
    )
    def test_clamps(
        self, page: int, page_size: int, expected: tuple[int, int]
    ) -> None:
        """Should clamp instead of rejecting out-of-range values."""
        request = PageRequest.build(page, page_size)

        assert (request.page, request.page_size) == expected

    def test_custom_max(self) -> None:
        assert PageRequest.build(1, 80, max_page_size=50).page_size == 50

    def test_offset(self) -> None:
        assert PageRequest.build(3, 20).offset == 40


class TestPage:
    """Tests for Page."""

    @pytest.mark.parametrize(
        ("total_items", "page_size", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (101, 100, 2)],
    )
    def test_total_pages(self, total_items: int, page_size: int, expected: int) -> None:
        page = Page.of([], PageRequest(page=1, page_size=page_size), total_items)

        assert page.total_pages == expected

    def test_of_copies_request(self) -> None:
        page = Page.of(["a"], PageRequest(page=2, page_size=1), 3)

        assert page.page == 2
        assert page.page_size == 1
        assert page.data == ["a"]
