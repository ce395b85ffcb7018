"""
Sticker Routes

Single-sticker operations.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..deps import get_current_user
from ..models import Sticker, User
from ..schemas import SuccessResponse
from ..services.storage import StorageService, get_storage_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/stickers", tags=["stickers"])


@router.delete("/{sticker_id}", response_model=SuccessResponse)
async def delete_sticker(
    sticker_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> SuccessResponse:
    """
    Delete one sticker.

    Unlike the pack endpoints this does not check that the sticker's pack
    belongs to the caller.
    """
    # TODO: check ownership through the sticker's pack once clients stop
    # relying on deleting stickers by id alone
    result = await db.execute(select(Sticker).where(Sticker.id == sticker_id))
    sticker = result.scalar_one_or_none()

    if not sticker:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sticker not found")

    await db.execute(delete(Sticker).where(Sticker.id == sticker_id))
    await db.commit()
    storage.delete_file(sticker.file_key)

    logger.info("User %s deleted sticker %s from pack %s", user.id, sticker_id, sticker.pack_id)
    return SuccessResponse()
