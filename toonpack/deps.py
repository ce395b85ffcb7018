"""
Request Dependencies

Caller identity and the long-lived components created at startup.
"""

import logging
from datetime import datetime

import httpx
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_db
from .models import User
from .models.user import UserRole
from .pipeline.generator import StickerGenerator

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the caller from the identity header set by the auth proxy.

    The user row is created on first sight and its ``last_signed_in``
    refreshed on every request, both in one upsert keyed on ``open_id``.
    """
    settings = get_settings()
    open_id = request.headers.get(settings.auth_user_header)
    if not open_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    insert = _UPSERT_INSERTS[db.get_bind().dialect.name]
    now = datetime.utcnow()
    stmt = insert(User).values(
        open_id=open_id,
        role=(UserRole.ADMIN if open_id == settings.owner_open_id else UserRole.USER).value,
        created_at=now,
        updated_at=now,
        last_signed_in=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[User.open_id],
        set_={"last_signed_in": now, "updated_at": now},
    )
    await db.execute(stmt)

    result = await db.execute(select(User).where(User.open_id == open_id))
    user = result.scalar_one()
    logger.debug("Resolved user %s as %s", open_id, user.id)
    return user


def get_sticker_generator(request: Request) -> StickerGenerator:
    """Sticker generator created at startup."""
    return request.app.state.sticker_generator


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client."""
    return request.app.state.http_client
