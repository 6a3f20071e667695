"""Business logic services for the JBest Eyes blog."""

from app.services.category import DEFAULT_CATEGORIES, CategoryService
from app.services.post import PostService, derive_excerpt
from app.services.query import PostQuery, build_pagination, list_posts
from app.services.upload import ImageUploadService, StoredImage

__all__ = [
    "CategoryService",
    "DEFAULT_CATEGORIES",
    "ImageUploadService",
    "PostQuery",
    "PostService",
    "StoredImage",
    "build_pagination",
    "derive_excerpt",
    "list_posts",
]
