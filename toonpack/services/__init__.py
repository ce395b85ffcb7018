"""
Toonpack Services

External service integrations.
"""

from .storage import StorageService
from .image_generation import ImageGenerationClient

__all__ = ["StorageService", "ImageGenerationClient"]
