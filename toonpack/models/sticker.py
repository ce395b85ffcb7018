"""
Sticker Model

One generated sticker image.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from toonpack.database import Base


class Sticker(Base):
    """
    Generated sticker model.

    ``emotion`` is free text: one of the preset ids or a label the user
    typed. ``prompt`` is the exact prompt sent to the generation service.
    """

    __tablename__ = "stickers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pack_id = Column(Integer, ForeignKey("sticker_packs.id"), nullable=False, index=True)

    # File info
    file_key = Column(String(512), nullable=False)
    file_url = Column(Text, nullable=False)

    # Generation metadata
    emotion = Column(String(100), nullable=False)
    prompt = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    pack = relationship("StickerPack", back_populates="stickers")

    def __repr__(self):
        return f"<Sticker {self.id} pack={self.pack_id} emotion={self.emotion}>"
