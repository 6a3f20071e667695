"""Post API endpoints, including comments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db import get_db
from app.schemas.common import SuccessResponse
from app.schemas.post import CommentCreate, PostCreate, PostListResponse, PostResponse, PostUpdate
from app.services.post import PostService
from app.services.query import PostQuery, list_posts

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostListResponse)
async def get_posts(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
    category: str | None = Query(None, description="Filter by category ID"),
    search: str | None = Query(None, description="Substring to find in title or content"),
    db: AsyncSession = Depends(get_db),
) -> PostListResponse:
    """List posts newest first with pagination."""
    service = PostService(db)
    posts, pagination = await list_posts(
        service,
        PostQuery(page=page, limit=limit, category=category, search=search),
    )

    return PostListResponse(
        data=[PostResponse.model_validate(p) for p in posts],
        pagination=pagination,
    )


@router.get("/{post_id}", response_model=SuccessResponse[PostResponse])
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[PostResponse]:
    """Get a single post.

    Each call increments the post's view count.
    """
    post = await PostService(db).get_post(post_id)
    return SuccessResponse(data=PostResponse.model_validate(post))


@router.post("", response_model=SuccessResponse[PostResponse], status_code=201)
async def create_post(
    post_in: PostCreate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[PostResponse]:
    """Create a post."""
    post = await PostService(db).create_post(post_in)
    return SuccessResponse(data=PostResponse.model_validate(post))


@router.put("/{post_id}", response_model=SuccessResponse[PostResponse])
async def update_post(
    post_id: str,
    post_in: PostUpdate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[PostResponse]:
    """Update a post."""
    post = await PostService(db).update_post(post_id, post_in)
    return SuccessResponse(data=PostResponse.model_validate(post))


@router.delete("/{post_id}", response_model=SuccessResponse[dict])
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[dict]:
    """Delete a post and its comments."""
    await PostService(db).delete_post(post_id)
    return SuccessResponse(data={})


@router.post(
    "/{post_id}/comments",
    response_model=SuccessResponse[PostResponse],
    status_code=201,
)
async def add_comment(
    post_id: str,
    comment_in: CommentCreate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[PostResponse]:
    """Append a comment to a post and return the updated post."""
    post = await PostService(db).add_comment(
        post_id,
        author=comment_in.author,
        content=comment_in.content,
    )
    return SuccessResponse(data=PostResponse.model_validate(post))
