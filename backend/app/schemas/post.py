"""Pydantic schemas for Post and Comment API."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, computed_field, field_validator

from app.schemas.common import CamelModel, Pagination, SuccessResponse


class PostBase(CamelModel):
    """Fields a client may set on a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=36, description="Category ID")
    excerpt: str | None = Field(None, max_length=200)
    featured_image: str = ""
    tags: list[str] = []
    is_published: bool = True

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, tags: list[str]) -> list[str]:
        """Trim each tag and drop blanks, keeping order."""
        return [tag.strip() for tag in tags if tag.strip()]


class PostCreate(PostBase):
    """Schema for creating a post."""


class PostUpdate(PostBase):
    """Schema for updating a post.

    Same rules as creation; only fields present in the body are written.
    """


class CommentCreate(CamelModel):
    """Schema for adding a comment to a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    author: str = Field(..., min_length=1, max_length=50)
    content: str = Field(..., min_length=1, max_length=500)


class CommentResponse(CamelModel):
    """Schema for comment response."""

    author: str
    content: str
    created_at: datetime


class PostCategory(CamelModel):
    """Category fields joined into a post response."""

    id: str
    name: str
    color: str


class PostResponse(CamelModel):
    """Schema for post response."""

    id: str
    title: str
    content: str
    excerpt: str | None = None
    featured_image: str = ""
    category_id: str
    category: PostCategory | None = None
    tags: list[str] = []
    is_published: bool
    view_count: int
    comments: list[CommentResponse] = []
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="formattedDate")
    @property
    def formatted_date(self) -> str:
        """Creation date as e.g. ``January 5, 2025``."""
        return f"{self.created_at:%B} {self.created_at.day}, {self.created_at.year}"


class PostListResponse(SuccessResponse[list[PostResponse]]):
    """Paginated post list."""

    pagination: Pagination
