"""
Cookbook Backend: Image Storage Unit Tests
===========================================

What:  FileService validation (extension, size, content type), storage and
       filename resolution.
How:   Each test gets its own tmp image directory. libmagic is patched out
       where the content check is not the subject of the test.
"""

from unittest.mock import patch

import pytest

from cookbook.exceptions import NotFoundError, ValidationError
from cookbook.services.file_service import FileService


class TestFileValidation:

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.service = FileService(str(tmp_path / "images"), max_file_size=1024)

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize("filename", ["photo.png", "photo.jpg", "photo.webp", "PHOTO.PNG", "photo.Webp"])
    def test_validate_extension_accepted(self, filename):
        assert self.service.validate_extension(filename).startswith(".")

    def test_validate_extension_jpeg_normalized(self):
        assert self.service.validate_extension("photo.JPEG") == ".jpg"

    @pytest.mark.parametrize("filename", ["animation.gif", "document.pdf", "malware.exe", "noextension"])
    def test_validate_extension_rejected(self, filename):
        with pytest.raises(ValidationError, match="not supported"):
            self.service.validate_extension(filename)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_validate_size_at_limit(self):
        self.service.validate_size(b"x" * 1024)

    def test_validate_size_over_limit(self):
        with pytest.raises(ValidationError, match="too large") as exc_info:
            self.service.validate_size(b"x" * 1025)
        assert exc_info.value.context["actual_size"] == 1025

    def test_validate_size_empty_file(self):
        with pytest.raises(ValidationError, match="empty"):
            self.service.validate_size(b"")


class TestFileStorage:

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.image_dir = tmp_path / "images"
        self.service = FileService(str(self.image_dir))

    @pytest.mark.asyncio
    async def test_save_image_writes_under_generated_name(self, sample_image_bytes):
        with patch.object(self.service, "validate_mime_type", return_value="image/png"):
            filename = await self.service.save_image("../../etc/evil.png", sample_image_bytes)

        assert filename.endswith(".png")
        assert "evil" not in filename
        assert (self.image_dir / filename).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_save_image_rejects_before_writing(self, sample_image_bytes):
        with patch.object(self.service, "validate_mime_type") as mime_check:
            with pytest.raises(ValidationError):
                await self.service.save_image("notes.txt", sample_image_bytes)
            mime_check.assert_not_called()

        assert list(self.image_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_save_image_rejects_non_image_content(self):
        with patch.object(
            self.service,
            "validate_mime_type",
            side_effect=ValidationError(message="not a supported image", field="image"),
        ):
            with pytest.raises(ValidationError, match="not a supported image"):
                await self.service.save_image("fake.png", b"plain text, not a png")

        assert list(self.image_dir.iterdir()) == []

    # ── Resolution ────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_resolve_stored_image(self, sample_image_bytes):
        filename = await self.service.store(sample_image_bytes, ".png")
        assert self.service.resolve(filename) == (self.image_dir / filename).resolve()

    def test_resolve_unknown_image(self):
        with pytest.raises(NotFoundError):
            self.service.resolve("missing.png")

    def test_resolve_refuses_traversal(self):
        with pytest.raises(ValidationError, match="Invalid image name"):
            self.service.resolve("../secret.png")
