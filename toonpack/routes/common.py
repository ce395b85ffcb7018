"""
Route Helpers

Lookups with ownership checks, and model-to-schema conversion.
"""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ReferencePhoto, Sticker, StickerPack, User
from ..schemas import FailedEmotion, PackResponse, StickerResponse


async def get_owned_photo(
    db: AsyncSession,
    photo_id: int,
    user: User,
    action: str = "use",
) -> ReferencePhoto:
    """
    Load a reference photo owned by ``user``.

    Raises:
        HTTPException: 404 if missing, 403 if owned by someone else
    """
    result = await db.execute(select(ReferencePhoto).where(ReferencePhoto.id == photo_id))
    photo = result.scalar_one_or_none()

    if not photo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reference photo not found")

    if photo.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this reference photo",
        )

    return photo


async def get_owned_pack(
    db: AsyncSession,
    pack_id: int,
    user: User,
    action: str = "view",
) -> StickerPack:
    """
    Load a sticker pack owned by ``user``.

    Raises:
        HTTPException: 404 if missing, 403 if owned by someone else
    """
    result = await db.execute(select(StickerPack).where(StickerPack.id == pack_id))
    pack = result.scalar_one_or_none()

    if not pack:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sticker pack not found")

    if pack.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this pack",
        )

    return pack


async def get_pack_stickers(db: AsyncSession, pack_id: int) -> list[Sticker]:
    """Stickers of a pack in pack order (creation order)."""
    result = await db.execute(
        select(Sticker)
        .where(Sticker.pack_id == pack_id)
        .order_by(Sticker.id)
    )
    return list(result.scalars().all())


def pack_to_response(pack: StickerPack, sticker_count: int = 0) -> PackResponse:
    """Convert StickerPack model to response schema."""
    return PackResponse(
        id=pack.id,
        name=pack.name,
        description=pack.description,
        reference_photo_id=pack.reference_photo_id,
        style=pack.style,
        body_type=pack.body_type,
        status=pack.status,
        created_at=pack.created_at,
        updated_at=pack.updated_at,
        sticker_count=sticker_count,
    )


def sticker_to_response(sticker: Sticker) -> StickerResponse:
    """Convert Sticker model to response schema."""
    return StickerResponse.model_validate(sticker)


def failures_to_response(pack: StickerPack) -> list[FailedEmotion]:
    """Failed emotions recorded on a pack."""
    return [FailedEmotion(**item) for item in pack.failed_emotions or []]
