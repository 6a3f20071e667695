"""Database models for the JBest Eyes blog."""

from app.db.models.category import DEFAULT_CATEGORY_COLOR, Category
from app.db.models.comment import Comment
from app.db.models.post import Post

__all__ = [
    "Category",
    "Comment",
    "DEFAULT_CATEGORY_COLOR",
    "Post",
]
