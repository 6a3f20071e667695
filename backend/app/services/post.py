"""Post service: posts, their comments, and the category counters they drive.

Counter rules kept by this service:

- creating a post adds one to its category's ``post_count``
- deleting a post subtracts one (never below zero)
- updating a post never touches counters, even when the category changes
- reading a single post adds one to its ``view_count``

The post write and the counter write run on the same session, so they are
committed together by the request's unit of work.
"""

from __future__ import annotations

from sqlalchemy import String, Text, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from app.core.exceptions import FieldError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.db.models import Comment, Post
from app.schemas.post import PostCreate, PostUpdate
from app.services.category import CategoryService

logger = get_logger(__name__)

EXCERPT_SOURCE_LENGTH = 150
EXCERPT_SUFFIX = "..."

COMMENT_AUTHOR_MAX_LENGTH = 50
COMMENT_CONTENT_MAX_LENGTH = 500

INVALID_CATEGORY_MESSAGE = "Invalid category ID"


def derive_excerpt(content: str) -> str:
    """Build an excerpt from the first 150 characters of the content."""
    return content[:EXCERPT_SOURCE_LENGTH] + EXCERPT_SUFFIX


class PostService:
    """Service for posts and their embedded comments."""

    def __init__(self, db: AsyncSession):
        """Initialize the post service.

        Args:
            db: The database session.
        """
        self.db = db
        self.categories = CategoryService(db)

    # ========== Queries ==========

    async def list_posts(
        self,
        page: int,
        page_size: int,
        category_id: str | None = None,
        search: str | None = None,
    ) -> tuple[list[Post], int]:
        """List posts newest first with optional filters.

        Args:
            page: 1-based page number.
            page_size: Items per page.
            category_id: Only posts referencing this category.
            search: Case-insensitive substring matched against title or content.

        Returns:
            The page of posts and the total number of matching posts.
        """
        query = select(Post)

        if category_id:
            query = query.where(Post.category_id == category_id)

        if search:
            term = search.lower()
            query = query.where(
                or_(
                    func.lower(Post.title, type_=String).contains(term, autoescape=True),
                    func.lower(Post.content, type_=Text).contains(term, autoescape=True),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        offset = (page - 1) * page_size
        query = (
            query.order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        result = await self.db.execute(query)
        posts = list(result.unique().scalars().all())

        return posts, total

    async def get_post(self, post_id: str) -> Post:
        """Get a post and count the read.

        Not idempotent: every successful call adds one to ``view_count``
        before the post is returned.

        Raises:
            NotFoundError: If no post has that ID.
        """
        result = await self.db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1)
        )
        if result.rowcount == 0:
            raise NotFoundError("Post")

        post = await self._load(post_id)
        logger.debug("post_viewed", post_id=post_id, view_count=post.view_count)
        return post

    # ========== Mutations ==========

    async def create_post(self, data: PostCreate) -> Post:
        """Create a post and count it against its category.

        The excerpt is derived from the content when none is supplied.

        Raises:
            ValidationError: If the referenced category does not exist.
        """
        await self._ensure_category(data.category)

        post = Post(
            title=data.title,
            content=data.content,
            excerpt=data.excerpt or derive_excerpt(data.content),
            featured_image=data.featured_image,
            category_id=data.category,
            tags=list(data.tags),
            is_published=data.is_published,
            view_count=0,
        )
        self.db.add(post)
        await self.db.flush()

        await self.categories.increment_post_count(post.category_id)

        logger.info(
            "post_created",
            post_id=post.id,
            category_id=post.category_id,
            derived_excerpt=not data.excerpt,
        )

        return await self._load(post.id)

    async def update_post(self, post_id: str, data: PostUpdate) -> Post:
        """Update a post's fields in place.

        The excerpt is not re-derived, and category counters are left alone
        even when ``category`` changes.

        Raises:
            NotFoundError: If no post has that ID.
            ValidationError: If the referenced category does not exist.
        """
        post = await self._load(post_id)

        update_data = data.model_dump(exclude_unset=True)
        if "category" in update_data:
            await self._ensure_category(update_data["category"])
            update_data["category_id"] = update_data.pop("category")

        if update_data.get("category_id", post.category_id) != post.category_id:
            logger.info(
                "post_category_reassigned",
                post_id=post_id,
                from_category_id=post.category_id,
                to_category_id=update_data["category_id"],
            )

        for field, value in update_data.items():
            setattr(post, field, value)

        await self.db.flush()

        logger.info("post_updated", post_id=post_id, fields=sorted(update_data))
        return await self._load(post_id)

    async def delete_post(self, post_id: str) -> None:
        """Delete a post and its comments, releasing its category count.

        Raises:
            NotFoundError: If no post has that ID.
        """
        post = await self._load(post_id)
        category_id = post.category_id

        await self.categories.decrement_post_count(category_id)
        await self.db.delete(post)
        await self.db.flush()

        logger.info("post_deleted", post_id=post_id, category_id=category_id)

    async def add_comment(self, post_id: str, author: str, content: str) -> Post:
        """Append a comment to the end of a post's comment list.

        Raises:
            ValidationError: If author or content is empty or too long.
            NotFoundError: If no post has that ID.
        """
        author = (author or "").strip()
        content = (content or "").strip()
        self._validate_comment(author, content)

        post = await self._load(post_id)
        post.comments.append(Comment(author=author, content=content))
        await self.db.flush()

        logger.info("comment_added", post_id=post_id, comment_count=len(post.comments))
        return await self._load(post_id)

    # ========== Helpers ==========

    async def _load(self, post_id: str) -> Post:
        """Load a post with its category and comments from the database."""
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id)
            .options(joinedload(Post.category), selectinload(Post.comments))
            .execution_options(populate_existing=True)
        )
        post = result.unique().scalar_one_or_none()
        if post is None:
            raise NotFoundError("Post")
        return post

    async def _ensure_category(self, category_id: str) -> None:
        if not await self.categories.exists(category_id):
            raise ValidationError.for_field("category", INVALID_CATEGORY_MESSAGE)

    @staticmethod
    def _validate_comment(author: str, content: str) -> None:
        errors: list[FieldError] = []
        if not author:
            errors.append(FieldError("author", "Author name is required"))
        elif len(author) > COMMENT_AUTHOR_MAX_LENGTH:
            errors.append(
                FieldError("author", f"Author name cannot be more than {COMMENT_AUTHOR_MAX_LENGTH} characters")
            )
        if not content:
            errors.append(FieldError("content", "Comment content is required"))
        elif len(content) > COMMENT_CONTENT_MAX_LENGTH:
            errors.append(
                FieldError("content", f"Comment cannot be more than {COMMENT_CONTENT_MAX_LENGTH} characters")
            )
        if errors:
            raise ValidationError("Please provide author and content for the comment", errors)
