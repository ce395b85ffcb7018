"""
Reference Photo Model

Selfies uploaded as the likeness source for sticker generation.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from toonpack.database import Base


class ReferencePhoto(Base):
    """
    Uploaded reference photo.

    Immutable once created. The public URL is what the image generation
    service receives as its reference image.
    """

    __tablename__ = "reference_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # File info
    file_key = Column(String(512), nullable=False)
    file_url = Column(Text, nullable=False)
    original_filename = Column(String(255), nullable=True)
    mime_type = Column(String(100), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ReferencePhoto {self.id} user={self.user_id}>"
