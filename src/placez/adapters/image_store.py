"""Local filesystem storage for uploaded images."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from placez.domain.models import ImageUpload
from placez.errors import ValidationError

_MIME_TYPE_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
}
MAX_IMAGE_BYTES = 500_000

_logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Interface for storing uploaded images."""

    def save(self, upload: ImageUpload) -> str:
        """Store an upload and return its public path."""

    def discard(self, path: str) -> None:
        """Remove a stored image, logging any failure."""


@dataclass
class LocalImageStore(ImageStore):
    """Stores images in a directory served under ``public_prefix``."""

    directory: Path
    public_prefix: str = "uploads/images"

    def save(self, upload: ImageUpload) -> str:
        """Validate and write an uploaded image to disk."""
        extension = _MIME_TYPE_EXTENSIONS.get(upload.content_type)
        if extension is None:
            raise ValidationError("Invalid mime type!")
        if not upload.data:
            raise ValidationError("Uploaded image is empty.")
        if len(upload.data) > MAX_IMAGE_BYTES:
            raise ValidationError("Uploaded image is too large.")
        self.directory.mkdir(parents=True, exist_ok=True)
        filename = f"{uuid4()}.{extension}"
        (self.directory / filename).write_bytes(upload.data)
        return f"{self.public_prefix}/{filename}"

    def discard(self, path: str) -> None:
        """Delete a stored image; failures are logged, never raised."""
        target = self.directory / Path(path).name
        try:
            target.unlink()
        except OSError:
            _logger.warning("Failed to delete stored image", extra={"path": path})
