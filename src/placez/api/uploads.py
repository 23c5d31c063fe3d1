"""Helpers for multipart image uploads."""

from fastapi import UploadFile

from placez.adapters.image_store import MAX_IMAGE_BYTES
from placez.domain.models import ImageUpload
from placez.errors import ValidationError


async def read_upload(upload: UploadFile) -> ImageUpload:
    """Read an uploaded file into memory, refusing anything over the size cap.

    At most ``MAX_IMAGE_BYTES + 1`` bytes are read, so oversized files are
    rejected without being loaded whole.
    """
    try:
        if upload.size is not None and upload.size > MAX_IMAGE_BYTES:
            raise ValidationError("Uploaded image is too large.")
        data = await upload.read(MAX_IMAGE_BYTES + 1)
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError("Uploaded image is too large.")
    finally:
        await upload.close()
    return ImageUpload(
        filename=upload.filename or "",
        content_type=upload.content_type or "",
        data=data,
    )
