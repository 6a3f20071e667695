"""Post listing: turns page/limit/category/search parameters into a store call."""

from __future__ import annotations

import math
from dataclasses import dataclass

from app.db.models import Post
from app.schemas.common import Pagination
from app.services.post import PostService


@dataclass(frozen=True)
class PostQuery:
    """Listing parameters as received from the client."""

    page: int = 1
    limit: int = 10
    category: str | None = None
    search: str | None = None

    def normalized(self) -> PostQuery:
        """Blank filters mean no filter."""
        return PostQuery(
            page=max(self.page, 1),
            limit=max(self.limit, 1),
            category=(self.category or "").strip() or None,
            search=(self.search or "").strip() or None,
        )


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """Pagination metadata; ``pages`` is 0 when nothing matches."""
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit),
    )


async def list_posts(service: PostService, query: PostQuery) -> tuple[list[Post], Pagination]:
    """Run a listing query and shape its pagination metadata."""
    query = query.normalized()
    posts, total = await service.list_posts(
        page=query.page,
        page_size=query.limit,
        category_id=query.category,
        search=query.search,
    )
    return posts, build_pagination(query.page, query.limit, total)
