"""Image upload API endpoint."""

from __future__ import annotations

from fastapi import APIRouter, File, Request, UploadFile

from app.core.exceptions import ValidationError
from app.schemas.common import SuccessResponse
from app.schemas.upload import UploadedImage
from app.services.upload import ImageUploadService

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/image", response_model=SuccessResponse[UploadedImage])
async def upload_image(
    request: Request,
    image: UploadFile | None = File(None, description="Image file (max 5MB)"),
) -> SuccessResponse[UploadedImage]:
    """Upload a single image and return the URL it is served from.

    Accepts multipart/form-data with the file in the ``image`` field.
    """
    if image is None:
        raise ValidationError.for_field("image", "No file uploaded")

    content = await image.read()
    stored = await ImageUploadService().save_image(
        filename=image.filename or "image",
        content=content,
        content_type=image.content_type,
    )

    return SuccessResponse(
        data=UploadedImage(
            filename=stored.filename,
            original_name=stored.original_name,
            size=stored.size,
            url=stored.url(str(request.base_url)),
        )
    )
