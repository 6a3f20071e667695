"""Pydantic schemas for Category API."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from app.db.models.category import DEFAULT_CATEGORY_COLOR
from app.schemas.common import CamelModel, SuccessResponse
from app.schemas.post import PostResponse

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"


class CategoryBase(CamelModel):
    """Fields a client may set on a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=200)
    color: str = Field(DEFAULT_CATEGORY_COLOR, pattern=HEX_COLOR_PATTERN)


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""


class CategoryUpdate(CategoryBase):
    """Schema for updating a category.

    ``name`` stays required; the remaining fields are only changed when
    present in the request body.
    """


class CategoryResponse(CamelModel):
    """Schema for category response."""

    id: str
    name: str
    description: str | None = None
    color: str
    post_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryDetail(CategoryResponse):
    """Category with the posts that reference it."""

    posts: list[PostResponse] = []


class CategoryListResponse(SuccessResponse[list[CategoryResponse]]):
    """Category list with item count."""

    count: int

