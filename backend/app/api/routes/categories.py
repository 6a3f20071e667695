"""Category API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageUnavailableError
from app.core.logging import get_logger
from app.db import get_db
from app.schemas.category import (
    CategoryCreate,
    CategoryDetail,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from app.schemas.common import SuccessResponse
from app.schemas.post import PostResponse
from app.services.category import DEFAULT_CATEGORIES, CategoryService

logger = get_logger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def get_categories(
    db: AsyncSession = Depends(get_db),
) -> CategoryListResponse:
    """List categories sorted by name.

    Falls back to the built-in default set when the database is unreachable.
    """
    try:
        categories = [
            CategoryResponse.model_validate(c)
            for c in await CategoryService(db).list_categories()
        ]
    except StorageUnavailableError as e:
        logger.warning("returning_default_categories", reason=e.message)
        categories = [CategoryResponse(**c) for c in DEFAULT_CATEGORIES]

    return CategoryListResponse(data=categories, count=len(categories))


@router.get("/{category_id}", response_model=SuccessResponse[CategoryDetail])
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[CategoryDetail]:
    """Get a category with its posts."""
    service = CategoryService(db)
    category = await service.get_category(category_id)
    posts = await service.get_category_posts(category_id)

    detail = CategoryDetail.model_validate(category, from_attributes=True)
    detail.posts = [PostResponse.model_validate(p) for p in posts]
    return SuccessResponse(data=detail)


@router.post("", response_model=SuccessResponse[CategoryResponse], status_code=201)
async def create_category(
    category_in: CategoryCreate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[CategoryResponse]:
    """Create a category."""
    category = await CategoryService(db).create_category(category_in)
    return SuccessResponse(data=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=SuccessResponse[CategoryResponse])
async def update_category(
    category_id: str,
    category_in: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[CategoryResponse]:
    """Update a category."""
    category = await CategoryService(db).update_category(category_id, category_in)
    return SuccessResponse(data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=SuccessResponse[dict])
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[dict]:
    """Delete a category that has no posts."""
    await CategoryService(db).delete_category(category_id)
    return SuccessResponse(data={})
