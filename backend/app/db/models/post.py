"""Post model: a blog article owning its ordered comments."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.db.models.category import Category
    from app.db.models.comment import Comment


class Post(TimestampMixin, Base):
    """A single blog article."""

    __tablename__ = "posts"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    # Article data
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(String(200), nullable=True)
    featured_image: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Category reference, stored by id only. A category row can disappear
    # while posts still point at it (see update in PostService), so there is
    # no database-level foreign key here.
    category_id: Mapped[str] = mapped_column(String(36), nullable=False)

    # Relationships
    category: Mapped[Category | None] = relationship(
        "Category",
        primaryjoin="foreign(Post.category_id) == Category.id",
        viewonly=True,
        lazy="joined",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("view_count >= 0", name="ck_posts_view_count_non_negative"),
        Index("ix_posts_category_id", "category_id"),
        Index("ix_posts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post {self.title!r}>"
