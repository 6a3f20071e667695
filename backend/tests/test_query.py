"""Tests for post listing parameters and pagination metadata."""

from __future__ import annotations

import pytest

from app.services.query import PostQuery, build_pagination


@pytest.mark.parametrize(
    "total,limit,pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (13, 6, 3)],
)
def test_build_pagination_pages(total: int, limit: int, pages: int) -> None:
    pagination = build_pagination(page=1, limit=limit, total=total)

    assert pagination.pages == pages
    assert pagination.total == total
    assert pagination.limit == limit


def test_normalized_blank_filters() -> None:
    query = PostQuery(page=2, limit=5, category="   ", search="").normalized()

    assert query == PostQuery(page=2, limit=5, category=None, search=None)


def test_normalized_trims_filters() -> None:
    query = PostQuery(category=" abc ", search="  nature ").normalized()

    assert query.category == "abc"
    assert query.search == "nature"


def test_normalized_clamps_page_and_limit() -> None:
    query = PostQuery(page=0, limit=-3).normalized()

    assert query.page == 1
    assert query.limit == 1
