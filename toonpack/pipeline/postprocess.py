"""
Post-Processing Pipeline

Turn a generated image into a Telegram-ready sticker: a fixed-size square
PNG with a transparent background.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


@dataclass
class PostProcessConfig:
    """Configuration for post-processing."""
    size: int = 512  # Square canvas edge in pixels
    background: tuple[int, int, int, int] = TRANSPARENT
    optimize: bool = True  # Smaller PNGs, Telegram caps stickers at 512KB


class StickerPostProcessor:
    """
    Fit an image onto a square transparent canvas.

    Pipeline:
    1. Decode and convert to RGBA
    2. Scale to fit the canvas keeping aspect ratio ("contain")
    3. Center on a transparent canvas
    4. Encode as PNG
    """

    mime_type = "image/png"

    def __init__(self, config: Optional[PostProcessConfig] = None):
        """Initialize post-processor."""
        self.config = config or PostProcessConfig()

    def decode(self, data: bytes) -> Image.Image:
        """
        Decode raw bytes into an RGBA image.

        Raises:
            PIL.UnidentifiedImageError: If the bytes are not an image
        """
        image = Image.open(io.BytesIO(data))
        image.load()
        return image.convert("RGBA")

    def fit(self, image: Image.Image) -> Image.Image:
        """
        Scale and pad an image to the configured square size.

        Smaller images are scaled up, larger ones down; the longer side
        always touches the canvas edge.
        """
        size = (self.config.size, self.config.size)
        fitted = ImageOps.contain(image, size, method=Image.Resampling.LANCZOS)

        canvas = Image.new("RGBA", size, self.config.background)
        offset = (
            (size[0] - fitted.width) // 2,
            (size[1] - fitted.height) // 2,
        )
        canvas.alpha_composite(fitted, dest=offset)
        return canvas

    def encode(self, image: Image.Image) -> bytes:
        """Encode an image as PNG bytes."""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG", optimize=self.config.optimize)
        return buffer.getvalue()

    def process(self, data: bytes) -> bytes:
        """
        Run the full pipeline on raw image bytes.

        Args:
            data: Encoded source image (any format Pillow reads)

        Returns:
            PNG bytes of exactly ``size`` x ``size`` pixels
        """
        image = self.decode(data)
        logger.debug(f"Fitting {image.size} image onto {self.config.size}px canvas")
        result = self.encode(self.fit(image))
        logger.debug(f"Sticker encoded, {len(result)} bytes")
        return result
