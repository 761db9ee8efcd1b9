"""
Cookbook Backend: Image Routes
===============================

POST /uploadImage     multipart field `image`; returns {"image": "<filename>"}
GET  /images/{name}   serves a stored image

Request flow (upload):
    1. FastAPI extracts the UploadFile from multipart/form-data
    2. The whole file is read into memory (bounded by the size check)
    3. FileService validates extension, size and content type, then stores
    4. The caller puts the returned filename into a recipe's `image` field
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from cookbook.models import User
from cookbook.routes.deps import get_file_service, require_user
from cookbook.schemas.common import ErrorResponse, ImageUploadResponse
from cookbook.services.file_service import FileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.post(
    "/uploadImage",
    response_model=ImageUploadResponse,
    responses={
        400: {"description": "Invalid image type or size", "model": ErrorResponse},
        403: {"description": "Unknown or missing X-User-Id", "model": ErrorResponse},
    },
    summary="Upload a recipe image",
)
async def upload_image(
    image: UploadFile = File(..., description="PNG, JPEG or WebP image"),
    _: User = Depends(require_user),
    files: FileService = Depends(get_file_service),
) -> ImageUploadResponse:
    try:
        content = await image.read()
        logger.info("Received image upload: filename=%s, size=%d bytes", image.filename, len(content))
        filename = await files.save_image(image.filename or "upload.jpg", content)
    finally:
        await image.close()
    return ImageUploadResponse(image=filename)


@router.get(
    "/images/{filename}",
    summary="Serve a recipe image",
    responses={404: {"description": "Image not found", "model": ErrorResponse}},
)
async def serve_image(
    filename: str,
    files: FileService = Depends(get_file_service),
) -> FileResponse:
    return FileResponse(
        path=str(files.resolve(filename)),
        headers={"Cache-Control": "public, max-age=86400"},
    )
