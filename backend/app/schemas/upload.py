"""Pydantic schemas for the image upload API."""

from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel


class UploadedImage(CamelModel):
    """A stored image and the URL it is served from."""

    filename: str = Field(..., description="Generated name on disk")
    original_name: str = Field(..., description="Name supplied by the client")
    size: int = Field(..., ge=0, description="Size in bytes")
    url: str
