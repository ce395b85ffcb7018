"""
Reference Photo Routes

Selfie upload and single-sticker previews.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_db
from ..deps import get_current_user, get_sticker_generator
from ..models import ReferencePhoto, User
from ..pipeline.generator import StickerGenerationError, StickerGenerator
from ..schemas import PreviewRequest, PreviewResponse, ReferencePhotoResponse
from ..services.storage import StorageService, get_storage_service, random_suffix, safe_key_part
from .common import get_owned_photo

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(prefix="/references", tags=["references"])


@router.post("", response_model=ReferencePhotoResponse, status_code=status.HTTP_201_CREATED)
async def upload_reference(
    file: Annotated[UploadFile, File(description="Selfie to cartoonize")],
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> ReferencePhotoResponse:
    """
    Upload a reference photo.

    Photos are validated for:
    - Content type (image/*)
    - Extension (JPEG, PNG, WebP)
    - File size (max 10MB by default)
    """
    filename = file.filename or "upload"
    content_type = file.content_type or ""

    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail=f"{filename}: Not an image")

    ext = Path(filename).suffix.lower()
    if ext not in settings.allowed_extensions:
        raise HTTPException(status_code=400, detail=f"{filename}: Invalid file type")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail=f"{filename}: Empty file")

    size_mb = len(content) / (1024 * 1024)
    if size_mb > settings.max_upload_size_mb:
        raise HTTPException(
            status_code=400,
            detail=f"{filename}: File too large ({size_mb:.1f}MB, max {settings.max_upload_size_mb}MB)",
        )

    file_key = f"{user.id}/references/{safe_key_part(Path(filename).stem)}-{random_suffix()}{ext}"
    file_url = storage.put(file_key, content, content_type)

    photo = ReferencePhoto(
        user_id=user.id,
        file_key=file_key,
        file_url=file_url,
        original_filename=filename,
        mime_type=content_type,
    )
    db.add(photo)
    await db.flush()

    logger.info("User %s uploaded reference photo %s", user.id, photo.id)
    return ReferencePhotoResponse.model_validate(photo)


@router.get("", response_model=list[ReferencePhotoResponse])
async def list_references(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[ReferencePhotoResponse]:
    """List the caller's reference photos, newest first."""
    result = await db.execute(
        select(ReferencePhoto)
        .where(ReferencePhoto.user_id == user.id)
        .order_by(ReferencePhoto.created_at.desc(), ReferencePhoto.id.desc())
    )
    return [ReferencePhotoResponse.model_validate(p) for p in result.scalars().all()]


@router.post("/{photo_id}/preview", response_model=PreviewResponse)
async def preview_sticker(
    photo_id: int,
    data: PreviewRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
    generator: StickerGenerator = Depends(get_sticker_generator),
) -> PreviewResponse:
    """
    Generate one sticker to preview an emotion/style combination.

    The image is stored under the caller's previews prefix and is not
    attached to any pack.
    """
    photo = await get_owned_photo(db, photo_id, user)

    try:
        sticker = await generator.generate_sticker(
            reference_image_url=photo.file_url,
            emotion=data.emotion,
            style=data.style,
            body_type=data.body_type,
        )
    except StickerGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    file_key = f"{user.id}/previews/{safe_key_part(data.emotion)}-{random_suffix()}.png"
    url = storage.put(file_key, sticker.image_bytes, sticker.mime_type)

    return PreviewResponse(url=url, emotion=data.emotion)
