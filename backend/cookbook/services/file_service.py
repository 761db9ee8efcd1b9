"""
Cookbook Backend: Recipe Image Storage
=======================================

What:  Validates uploaded recipe images, writes them to disk and resolves
       stored filenames back to paths for serving.
Who:   POST /uploadImage stores; GET /images/{filename} serves. A recipe
       keeps only the returned filename in its `image` field.

Validation order (cheapest first):
    1. Extension      .png / .jpg / .jpeg / .webp
    2. Size           non-empty, at most settings.max_file_size
    3. Content type   libmagic inspects the header bytes
    4. Store          <image_dir>/<uuid>.<ext>, async write

Filenames are generated (UUID + extension); no user input reaches the path.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles

from cookbook.config import settings
from cookbook.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
}

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}


class FileService:
    """
    Manages the recipe image directory.

    Args:
        image_dir:      Override the directory (tests pass a tmp path)
        max_file_size:  Override the size limit in bytes
    """

    def __init__(self, image_dir: Optional[str] = None, max_file_size: Optional[int] = None):
        self.image_dir = Path(image_dir or settings.image_dir).resolve()
        self.max_file_size = max_file_size or settings.max_file_size
        self.image_dir.mkdir(parents=True, exist_ok=True)

    def validate_extension(self, filename: str) -> str:
        """Returns the normalized extension (lowercase with dot)."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext},
            )
        return ".jpg" if ext == ".jpeg" else ext

    def validate_size(self, content: bytes) -> None:
        if not content:
            raise ValidationError(message="Uploaded image is empty", field="image")
        if len(content) > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"Image is too large ({len(content) / (1024 * 1024):.1f}MB). Maximum is {max_mb:.0f}MB.",
                field="image",
                context={"max_size": self.max_file_size, "actual_size": len(content)},
            )

    def validate_mime_type(self, content: bytes) -> str:
        """Detect the real content type from magic bytes; reject non-images."""
        # libmagic is only loaded once an upload actually arrives
        import magic

        try:
            mime_type = magic.from_buffer(content, mime=True)
        except magic.MagicException as e:
            logger.error("MIME type detection failed: %s", str(e))
            raise FileStorageError(
                message="Could not verify file type. Please try again.",
                context={"error": str(e)},
            ) from e

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message=f"File content type '{mime_type}' is not a supported image.",
                field="image",
                context={"detected_mime": mime_type},
            )
        return mime_type

    async def store(self, content: bytes, extension: str) -> str:
        """Write the bytes under a fresh UUID name; returns the filename."""
        filename = f"{uuid.uuid4()}{extension}"
        path = self.image_dir / filename
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"os_error": str(e)},
            ) from e

        logger.info("Image stored: %s (%d bytes)", filename, len(content))
        return filename

    async def save_image(self, filename: str, content: bytes) -> str:
        """Full pipeline: validate extension, size and content, then store."""
        ext = self.validate_extension(filename)
        self.validate_size(content)
        self.validate_mime_type(content)
        return await self.store(content, ext)

    def resolve(self, filename: str) -> Path:
        """Map a stored filename to its path, refusing anything outside image_dir."""
        path = (self.image_dir / filename).resolve()
        if path.parent != self.image_dir:
            raise ValidationError(message="Invalid image name", field="filename")
        if not path.is_file():
            raise NotFoundError(resource="image", resource_id=filename)
        return path

