"""
Database Models

SQLAlchemy ORM models for Toonpack.
"""

from toonpack.models.user import User
from toonpack.models.photo import ReferencePhoto
from toonpack.models.pack import StickerPack
from toonpack.models.sticker import Sticker

__all__ = ["User", "ReferencePhoto", "StickerPack", "Sticker"]
