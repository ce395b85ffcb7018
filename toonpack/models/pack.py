"""
Sticker Pack Model

A named collection of stickers generated from one reference photo.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from toonpack.database import Base


class PackStatus(str, Enum):
    """Pack status values."""
    GENERATING = "generating"
    COMPLETED = "completed"
    PARTIAL = "partial"  # Some emotions failed, see failed_emotions


class StickerPack(Base):
    """
    Sticker pack model.

    A pack contains:
    - The style and body type every sticker was rendered with
    - Generated stickers, one per requested emotion that succeeded
    - The emotions that failed and why
    """

    __tablename__ = "sticker_packs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    reference_photo_id = Column(Integer, ForeignKey("reference_photos.id"), nullable=True)

    # Generation options
    style = Column(String(50), default="cute_cartoon", nullable=False)
    body_type = Column(String(50), default="half_body", nullable=False)

    # Generation outcome
    status = Column(String(20), default=PackStatus.GENERATING.value, nullable=False, index=True)
    failed_emotions = Column(JSON, default=list)  # [{"emotion": ..., "reason": ...}]

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Stickers are removed explicitly before the pack row, never through the ORM
    stickers = relationship("Sticker", back_populates="pack", passive_deletes=True)

    def __repr__(self):
        return f"<StickerPack {self.id} user={self.user_id} status={self.status}>"
