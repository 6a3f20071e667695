"""Category service: CRUD plus the denormalized post counter."""

from __future__ import annotations

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, StorageUnavailableError, ValidationError
from app.core.logging import get_logger
from app.db.models import Category, Post
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = get_logger(__name__)

# Served by the listing endpoint when the database cannot be reached
DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"id": "1", "name": "Daily Life", "description": "Everyday experiences", "color": "#48bb78"},
    {"id": "2", "name": "Business Adventures", "description": "Entrepreneurial journeys", "color": "#ed8936"},
    {"id": "3", "name": "Coding Journey", "description": "Programming experiences", "color": "#667eea"},
    {"id": "4", "name": "Parenting Moments", "description": "Experiences raising children", "color": "#f56565"},
    {"id": "5", "name": "Nature Photography", "description": "Photos from nature", "color": "#38b2ac"},
]

DUPLICATE_NAME_MESSAGE = "Category name already exists"


class CategoryService:
    """Service for categories and their post counters."""

    def __init__(self, db: AsyncSession):
        """Initialize the category service.

        Args:
            db: The database session.
        """
        self.db = db

    async def list_categories(self) -> list[Category]:
        """List all categories sorted by name.

        Raises:
            StorageUnavailableError: If the database cannot be queried.
        """
        try:
            result = await self.db.execute(select(Category).order_by(Category.name))
        except (OperationalError, InterfaceError) as e:
            await self.db.rollback()
            logger.warning("category_list_storage_error", error=str(e.orig))
            raise StorageUnavailableError(str(e.orig)) from e
        return list(result.scalars().all())

    async def get_category(self, category_id: str) -> Category:
        """Get a category by ID.

        Raises:
            NotFoundError: If no category has that ID.
        """
        category = await self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category")
        return category

    async def get_category_posts(self, category_id: str) -> list[Post]:
        """Get the posts referencing a category, newest first."""
        result = await self.db.execute(
            select(Post)
            .where(Post.category_id == category_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(result.unique().scalars().all())

    async def exists(self, category_id: str) -> bool:
        """Check whether a category with the given ID exists."""
        result = await self.db.execute(
            select(Category.id).where(Category.id == category_id)
        )
        return result.scalar_one_or_none() is not None

    async def create_category(self, data: CategoryCreate) -> Category:
        """Create a category.

        Raises:
            ValidationError: If another category already uses the name.
        """
        await self._ensure_name_available(data.name)

        category = Category(
            name=data.name,
            description=data.description,
            color=data.color,
            post_count=0,
        )

        try:
            async with self.db.begin_nested():
                self.db.add(category)
                await self.db.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same name
            raise ValidationError.for_field("name", DUPLICATE_NAME_MESSAGE) from e

        logger.info("category_created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """Update a category's fields.

        Only fields present in the request are written. ``post_count`` is
        never set from input.

        Raises:
            NotFoundError: If no category has that ID.
            ValidationError: If the new name belongs to another category.
        """
        category = await self.get_category(category_id)

        update_data = data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] != category.name:
            await self._ensure_name_available(update_data["name"], exclude_id=category_id)

        for field, value in update_data.items():
            setattr(category, field, value)

        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError as e:
            raise ValidationError.for_field("name", DUPLICATE_NAME_MESSAGE) from e

        await self.db.refresh(category)

        logger.info("category_updated", category_id=category_id, fields=sorted(update_data))
        return category

    async def delete_category(self, category_id: str) -> None:
        """Delete a category that no post counts against.

        Raises:
            NotFoundError: If no category has that ID.
            ConflictError: If the category's post count is above zero.
        """
        category = await self.get_category(category_id)

        if category.post_count > 0:
            raise ConflictError("Cannot delete category with existing posts")

        await self.db.delete(category)
        await self.db.flush()

        logger.info("category_deleted", category_id=category_id)

    async def increment_post_count(self, category_id: str) -> None:
        """Add one to a category's post count in a single UPDATE."""
        await self.db.execute(
            update(Category)
            .where(Category.id == category_id)
            .values(post_count=Category.post_count + 1)
        )
        logger.debug("category_post_count_incremented", category_id=category_id)

    async def decrement_post_count(self, category_id: str) -> None:
        """Subtract one from a category's post count, never going below zero."""
        # case() instead of max() for SQLite compatibility
        await self.db.execute(
            update(Category)
            .where(Category.id == category_id)
            .values(
                post_count=case(
                    (Category.post_count > 0, Category.post_count - 1),
                    else_=0,
                )
            )
        )
        logger.debug("category_post_count_decremented", category_id=category_id)

    async def _ensure_name_available(self, name: str, exclude_id: str | None = None) -> None:
        query = select(Category.id).where(Category.name == name)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ValidationError.for_field("name", DUPLICATE_NAME_MESSAGE)
