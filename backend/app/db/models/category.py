"""Category model for grouping posts."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin

DEFAULT_CATEGORY_COLOR = "#3B82F6"


class Category(TimestampMixin, Base):
    """A named grouping with a display color.

    ``post_count`` is denormalized: it is adjusted by the post service on
    post create/delete rather than computed from the posts table. Posts are
    resolved by reverse lookup on ``Post.category_id``; the category keeps
    no list of its own.
    """

    __tablename__ = "categories"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    # Category data
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    color: Mapped[str] = mapped_column(
        String(7), default=DEFAULT_CATEGORY_COLOR, nullable=False
    )

    # Denormalized counter
    post_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("post_count >= 0", name="ck_categories_post_count_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Category {self.name!r} posts={self.post_count}>"
