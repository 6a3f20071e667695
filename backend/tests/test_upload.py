"""Tests for ImageUploadService and the image upload endpoint.

Tests cover:
- Content type and size validation
- Stored file naming
- Multipart upload through the API
"""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import AsyncClient

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.services.upload import ImageUploadService, StoredImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def service(uploads_dir: Path) -> ImageUploadService:
    """Create ImageUploadService writing to a temp directory."""
    return ImageUploadService(uploads_path=uploads_dir, max_size=1024)


# =============================================================================
# Service Tests
# =============================================================================


class TestSaveImage:
    """Validation and storage in save_image."""

    @pytest.mark.asyncio
    async def test_saves_image(self, service: ImageUploadService, uploads_dir: Path):
        stored = await service.save_image("Sunset.PNG", PNG_BYTES, "image/png")

        assert stored.original_name == "Sunset.PNG"
        assert stored.size == len(PNG_BYTES)
        assert stored.filename.startswith("image-")
        assert stored.filename.endswith(".png")
        assert stored.path == uploads_dir / stored.filename
        assert stored.path.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_names_are_unique(self, service: ImageUploadService):
        first = await service.save_image("a.jpg", PNG_BYTES, "image/jpeg")
        second = await service.save_image("a.jpg", PNG_BYTES, "image/jpeg")

        assert first.filename != second.filename

    @pytest.mark.asyncio
    async def test_odd_extension_dropped(self, service: ImageUploadService):
        stored = await service.save_image("photo.p n g", PNG_BYTES, "image/png")
        assert "." not in stored.filename

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", None])
    async def test_rejects_non_images(
        self, service: ImageUploadService, uploads_dir: Path, content_type
    ):
        with pytest.raises(ValidationError) as exc_info:
            await service.save_image("notes.txt", b"hello", content_type)

        assert exc_info.value.message == "Only image files are allowed"
        assert not uploads_dir.exists()

    @pytest.mark.asyncio
    async def test_rejects_empty_file(self, service: ImageUploadService):
        with pytest.raises(ValidationError) as exc_info:
            await service.save_image("empty.png", b"", "image/png")

        assert exc_info.value.message == "No file uploaded"

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, tmp_path: Path):
        service = ImageUploadService(uploads_path=tmp_path, max_size=5 * 1024 * 1024)

        with pytest.raises(ValidationError) as exc_info:
            await service.save_image("big.png", b"\x00" * (5 * 1024 * 1024 + 1), "image/png")

        assert exc_info.value.message == "File size must be less than 5MB"
        assert exc_info.value.errors[0].field == "image"

    @pytest.mark.asyncio
    async def test_exact_limit_allowed(self, service: ImageUploadService):
        stored = await service.save_image("edge.png", b"\x00" * 1024, "image/png")
        assert stored.size == 1024


def test_stored_image_url():
    image = StoredImage(filename="image-abc.png", original_name="a.png", size=1, path=Path("x"))

    assert image.url("http://localhost:5000/") == "http://localhost:5000/uploads/image-abc.png"
    assert image.url("http://localhost:5000") == "http://localhost:5000/uploads/image-abc.png"


# =============================================================================
# API Tests
# =============================================================================


@pytest.mark.asyncio
async def test_upload_endpoint(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload/image",
        files={"image": ("sunset.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["originalName"] == "sunset.png"
    assert data["size"] == len(PNG_BYTES)
    assert data["url"] == f"http://test/uploads/{data['filename']}"
    assert (settings.uploads_path / data["filename"]).read_bytes() == PNG_BYTES

    served = await client.get(f"/uploads/{data['filename']}")
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_upload_endpoint_rejects_text(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload/image",
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Only image files are allowed"


@pytest.mark.asyncio
async def test_upload_endpoint_without_file(client: AsyncClient) -> None:
    response = await client.post("/api/upload/image", data={"other": "x"})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "image", "message": "No file uploaded"}]
