"""
Pack Routes

Endpoints for generating, browsing, deleting and exporting sticker packs.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..deps import get_current_user, get_http_client, get_sticker_generator
from ..metrics import record_export
from ..models import Sticker, StickerPack, User
from ..models.pack import PackStatus
from ..pipeline.export import PackExportError, StickerFile, export_pack, sticker_filename
from ..pipeline.generator import StickerGenerator
from ..pipeline.prompts import get_available_body_types, get_available_emotions, get_available_styles
from ..schemas import (
    DownloadResponse,
    FailedEmotion,
    PackCreate,
    PackDetailResponse,
    PackGenerateResponse,
    PackListResponse,
    Preset,
    PresetListResponse,
    SuccessResponse,
)
from ..services.storage import StorageService, get_storage_service, random_suffix, safe_key_part
from .common import (
    failures_to_response,
    get_owned_pack,
    get_owned_photo,
    get_pack_stickers,
    pack_to_response,
    sticker_to_response,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/packs", tags=["packs"])


# ============================================================================
# Presets
# ============================================================================

@router.get("/presets", response_model=PresetListResponse)
async def list_presets() -> PresetListResponse:
    """List preset emotions, styles and body types."""
    return PresetListResponse(
        emotions=[Preset(**p) for p in get_available_emotions()],
        styles=[Preset(**p) for p in get_available_styles()],
        body_types=[Preset(**p) for p in get_available_body_types()],
    )


# ============================================================================
# Generation
# ============================================================================

@router.post("", response_model=PackGenerateResponse, status_code=status.HTTP_201_CREATED)
async def generate_pack(
    data: PackCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
    generator: StickerGenerator = Depends(get_sticker_generator),
) -> PackGenerateResponse:
    """
    Generate a sticker pack from a reference photo.

    This will:
    1. Create the pack in the "generating" state
    2. Generate one sticker per emotion, sequentially
    3. Store and record every sticker that succeeded
    4. Mark the pack "completed" or "partial"

    If no sticker could be generated the pack is removed and the request
    fails with 502. Generation takes roughly 10-30 seconds per emotion.
    """
    photo = await get_owned_photo(db, data.reference_photo_id, user)

    pack = StickerPack(
        user_id=user.id,
        name=data.pack_name,
        description=f"Sticker pack with {len(data.emotions)} emotions",
        reference_photo_id=photo.id,
        style=data.style,
        body_type=data.body_type,
        status=PackStatus.GENERATING.value,
    )
    db.add(pack)
    await db.flush()
    logger.info("Created pack %s for user %s, %d emotions", pack.id, user.id, len(data.emotions))

    batch = await generator.generate_batch(
        photo.file_url,
        data.emotions,
        data.style,
        data.body_type,
    )
    failed = [FailedEmotion(emotion=e, reason=r) for e, r in batch.failures.items()]

    if not batch.stickers:
        await db.execute(delete(StickerPack).where(StickerPack.id == pack.id))
        logger.error("Pack %s: every emotion failed, pack removed", pack.id)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": "Failed to generate any sticker",
                "failed": [f.model_dump() for f in failed],
            },
        )

    # Objects are written before the rows commit and are not removed if the
    # commit fails
    saved = []
    for emotion, generated in batch.stickers.items():
        file_key = f"{user.id}/stickers/{pack.id}/{safe_key_part(emotion)}-{random_suffix()}.png"
        file_url = storage.put(file_key, generated.image_bytes, generated.mime_type)

        sticker = Sticker(
            pack_id=pack.id,
            file_key=file_key,
            file_url=file_url,
            emotion=emotion,
            prompt=generated.prompt,
        )
        db.add(sticker)
        saved.append(sticker)

    pack.status = (PackStatus.COMPLETED if batch.is_complete else PackStatus.PARTIAL).value
    pack.failed_emotions = [f.model_dump() for f in failed]
    await db.flush()

    if failed:
        logger.warning(
            "Pack %s is partial: %s failed",
            pack.id,
            ", ".join(f.emotion for f in failed),
        )

    return PackGenerateResponse(
        pack=pack_to_response(pack, len(saved)),
        stickers=[sticker_to_response(s) for s in saved],
        failed=failed,
    )


# ============================================================================
# Pack CRUD
# ============================================================================

@router.get("", response_model=PackListResponse)
async def list_packs(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PackListResponse:
    """
    List the caller's packs.

    Returns packs ordered by creation date (newest first).
    """
    sticker_count = (
        select(func.count(Sticker.id))
        .where(Sticker.pack_id == StickerPack.id)
        .correlate(StickerPack)
        .scalar_subquery()
    )
    result = await db.execute(
        select(StickerPack, sticker_count)
        .where(StickerPack.user_id == user.id)
        .order_by(StickerPack.created_at.desc(), StickerPack.id.desc())
    )
    rows = result.all()

    return PackListResponse(
        packs=[pack_to_response(pack, count or 0) for pack, count in rows],
        total=len(rows),
    )


@router.get("/{pack_id}", response_model=PackDetailResponse)
async def get_pack(
    pack_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PackDetailResponse:
    """Get a pack and its stickers in pack order."""
    pack = await get_owned_pack(db, pack_id, user, action="view")
    stickers = await get_pack_stickers(db, pack_id)

    return PackDetailResponse(
        pack=pack_to_response(pack, len(stickers)),
        stickers=[sticker_to_response(s) for s in stickers],
        failed=failures_to_response(pack),
    )


@router.delete("/{pack_id}", response_model=SuccessResponse)
async def delete_pack(
    pack_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> SuccessResponse:
    """Delete a pack and all of its stickers."""
    pack = await get_owned_pack(db, pack_id, user, action="delete")
    stickers = await get_pack_stickers(db, pack_id)

    # Children first, then the pack row
    await db.execute(delete(Sticker).where(Sticker.pack_id == pack.id))
    await db.execute(delete(StickerPack).where(StickerPack.id == pack.id))
    await db.commit()

    # Rows are gone; a failed object delete only leaves an orphaned file
    for sticker in stickers:
        storage.delete_file(sticker.file_key)

    logger.info("Deleted pack %s with %d stickers", pack_id, len(stickers))
    return SuccessResponse()


# ============================================================================
# Export
# ============================================================================

@router.post("/{pack_id}/download", response_model=DownloadResponse)
async def download_pack(
    pack_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> DownloadResponse:
    """
    Export a pack as a ZIP archive.

    Stickers are named ``{n}_{emotion}.png`` in pack order; the archive
    also carries a README with Telegram publishing steps.
    """
    pack = await get_owned_pack(db, pack_id, user, action="download")
    stickers = await get_pack_stickers(db, pack_id)

    files = [
        StickerFile(filename=sticker_filename(i, s.emotion), url=s.file_url)
        for i, s in enumerate(stickers, start=1)
    ]

    try:
        archive = await export_pack(pack.name, files, http_client)
    except PackExportError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    zip_key = f"{user.id}/downloads/{pack.id}-{random_suffix()}.zip"
    url = storage.put(zip_key, archive, "application/zip")
    record_export(len(archive))

    logger.info("Exported pack %s to %s", pack_id, zip_key)
    return DownloadResponse(download_url=url)
