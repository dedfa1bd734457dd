"""Image upload router for store products and site content (admin only)"""

import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from ...auth import admin_required
from ...models import User
from ...services import storage_service
from ...services.storage_service import StorageError
from ...shared.responses import success

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_FILES = 5


async def read_image(file: UploadFile) -> bytes:
    """Read an upload, enforcing the image-only and size rules"""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed!")

    contents = await file.read()
    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds 5MB limit. Your file is {len(contents) / (1024 * 1024):.2f}MB.",
        )
    return contents


def image_size(contents: bytes) -> tuple[Optional[int], Optional[int]]:
    # SVG and other vector formats have no pixel size
    try:
        with Image.open(io.BytesIO(contents)) as img:
            return img.width, img.height
    except (UnidentifiedImageError, OSError):
        return None, None


@router.post("")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    _: User = Depends(admin_required),
):
    if image is None:
        raise HTTPException(status_code=400, detail="Please upload an image")

    contents = await read_image(image)
    try:
        result = storage_service.upload_image(contents, image.content_type)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error uploading image")

    width, height = image_size(contents)
    return success({**result, "width": width, "height": height})


@router.post("/multiple")
async def upload_images(
    images: Optional[list[UploadFile]] = File(None),
    _: User = Depends(admin_required),
):
    if not images:
        raise HTTPException(status_code=400, detail="Please upload at least one image")
    if len(images) > MAX_FILES:
        raise HTTPException(status_code=400, detail=f"You can upload at most {MAX_FILES} images at once")

    payloads = [(await read_image(f), f.content_type) for f in images]
    try:
        results = [storage_service.upload_image(contents, ctype) for contents, ctype in payloads]
    except StorageError:
        raise HTTPException(status_code=500, detail="Error uploading images")
    return success(results)


@router.delete("/{public_id:path}")
async def delete_image(public_id: str, _: User = Depends(admin_required)):
    try:
        storage_service.delete_image(public_id)
    except StorageError:
        raise HTTPException(status_code=400, detail="Failed to delete image")
    return success(message="Image deleted successfully")


__all__ = ["router"]
