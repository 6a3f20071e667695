"""Image upload service.

Stores uploaded images on the local filesystem under ``uploads_path``; the
directory is served statically at ``/uploads``.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger

logger = get_logger(__name__)

UPLOADS_URL_PREFIX = "/uploads"

# Lower-case extensions kept from the client's filename
_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


@dataclass(frozen=True)
class StoredImage:
    """An image written to the uploads directory."""

    filename: str
    original_name: str
    size: int
    path: Path

    def url(self, base_url: str) -> str:
        """Public URL of the image relative to the server's base URL."""
        return f"{base_url.rstrip('/')}{UPLOADS_URL_PREFIX}/{self.filename}"


class ImageUploadService:
    """Validates and stores uploaded images."""

    def __init__(self, uploads_path: Path | None = None, max_size: int | None = None):
        self.uploads_path = uploads_path or settings.uploads_path
        self.max_size = max_size if max_size is not None else settings.max_upload_size

    async def ensure_uploads_dir(self) -> None:
        """Ensure the uploads directory exists."""
        await aiofiles.os.makedirs(self.uploads_path, exist_ok=True)

    async def save_image(
        self,
        filename: str,
        content: bytes,
        content_type: str | None,
    ) -> StoredImage:
        """Validate and write an image.

        Args:
            filename: Name supplied by the client.
            content: Raw file bytes.
            content_type: MIME type supplied by the client.

        Returns:
            The stored image.

        Raises:
            ValidationError: If the file is not an image, is empty, or is
                larger than the configured maximum.
        """
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError.for_field("image", "Only image files are allowed")

        size = len(content)
        if size == 0:
            raise ValidationError.for_field("image", "No file uploaded")
        if size > self.max_size:
            raise ValidationError.for_field(
                "image",
                f"File size must be less than {self.max_size // (1024 * 1024)}MB",
            )

        stored_name = self._stored_name(filename)
        await self.ensure_uploads_dir()
        path = self.uploads_path / stored_name

        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

        logger.info(
            "image_uploaded",
            filename=stored_name,
            original_name=filename,
            size=size,
            content_type=content_type,
        )

        return StoredImage(
            filename=stored_name,
            original_name=filename,
            size=size,
            path=path,
        )

    @staticmethod
    def _stored_name(original: str) -> str:
        """Unique on-disk name that keeps a sane extension from the original."""
        ext = Path(original).suffix.lower()
        if not _EXTENSION_RE.match(ext):
            ext = ""
        return f"image-{uuid.uuid4().hex}{ext}"
