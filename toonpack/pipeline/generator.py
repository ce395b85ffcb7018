"""
Sticker Generator

Generate cartoon stickers from a reference photo through the image
generation API, then normalize them for Telegram.
"""

import logging
import time
from dataclasses import dataclass, field

import httpx

from ..metrics import record_sticker
from ..services.image_generation import ImageGenerationClient, OriginalImage
from .postprocess import StickerPostProcessor
from .prompts import DEFAULT_BODY_TYPE, DEFAULT_STYLE, STYLE_PRESETS, build_prompt

logger = logging.getLogger(__name__)


class StickerGenerationError(Exception):
    """Any failure while producing a single sticker."""


@dataclass
class GeneratedSticker:
    """A finished sticker ready for upload."""
    image_bytes: bytes
    mime_type: str
    prompt: str


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Both mappings keep the order emotions were requested in.
    """
    stickers: dict[str, GeneratedSticker] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return not self.failures


class StickerGenerator:
    """
    Sticker generator backed by a hosted image generation API.

    One sticker is:
    1. Prompt built from emotion, style and body type
    2. Image generated from the prompt and the reference photo
    3. Result downloaded
    4. Fitted onto a transparent square PNG
    """

    def __init__(
        self,
        image_client: ImageGenerationClient,
        http_client: httpx.AsyncClient,
        postprocessor: StickerPostProcessor | None = None,
    ):
        self.image_client = image_client
        self.http = http_client
        self.postprocessor = postprocessor or StickerPostProcessor()

    async def _download(self, url: str) -> bytes:
        response = await self.http.get(url)
        if not response.is_success:
            raise StickerGenerationError(
                f"Failed to download generated image: {response.reason_phrase}"
            )
        return response.content

    async def generate_sticker(
        self,
        reference_image_url: str,
        emotion: str,
        style: str = DEFAULT_STYLE,
        body_type: str = DEFAULT_BODY_TYPE,
    ) -> GeneratedSticker:
        """
        Generate one sticker.

        Args:
            reference_image_url: Public URL of the user's reference photo
            emotion: Emotion preset key or free-text label
            style: Style preset key
            body_type: Body type preset key

        Returns:
            GeneratedSticker with PNG bytes

        Raises:
            StickerGenerationError: If any step fails. Nothing is retried.
        """
        prompt = build_prompt(emotion, style, body_type)
        logger.info(f"Generating sticker with emotion: {emotion}")
        logger.debug(f"Using reference image: {reference_image_url}")

        # Unknown styles render as the default, label them the same way
        metric_style = style if style in STYLE_PRESETS else DEFAULT_STYLE
        started = time.monotonic()
        try:
            result = await self.image_client.generate_image(
                prompt=prompt,
                original_images=[OriginalImage(url=reference_image_url)],
            )
            if not result.url:
                raise StickerGenerationError("Failed to generate image: No URL returned")

            logger.debug(f"AI generated image: {result.url}")
            raw = await self._download(result.url)
            image_bytes = self.postprocessor.process(raw)
        except Exception as e:
            record_sticker(metric_style, time.monotonic() - started, success=False)
            logger.error(f"Error generating sticker for emotion {emotion}: {e}")
            raise StickerGenerationError(f"Failed to generate sticker: {e}") from e

        record_sticker(metric_style, time.monotonic() - started, success=True)
        logger.info(f"Sticker generated successfully, size: {len(image_bytes)} bytes")

        return GeneratedSticker(
            image_bytes=image_bytes,
            mime_type=self.postprocessor.mime_type,
            prompt=prompt,
        )

    async def generate_batch(
        self,
        reference_image_url: str,
        emotions: list[str],
        style: str = DEFAULT_STYLE,
        body_type: str = DEFAULT_BODY_TYPE,
    ) -> BatchResult:
        """
        Generate stickers for several emotions, one at a time.

        Runs sequentially so the generation API only ever sees one request
        from a batch. A failed emotion is logged and recorded in
        ``failures``; the rest of the batch carries on.

        Args:
            reference_image_url: Public URL of the reference photo
            emotions: Emotions in the order they should be generated
            style: Style preset key
            body_type: Body type preset key

        Returns:
            BatchResult with successes and failures
        """
        result = BatchResult()

        for emotion in dict.fromkeys(emotions):
            try:
                result.stickers[emotion] = await self.generate_sticker(
                    reference_image_url,
                    emotion,
                    style,
                    body_type,
                )
                logger.info(f"Generated sticker for emotion: {emotion}")
            except StickerGenerationError as e:
                logger.warning(f"Skipping emotion {emotion}: {e}")
                result.failures[emotion] = str(e)

        logger.info(
            f"Batch finished: {len(result.stickers)} generated, {len(result.failures)} failed"
        )
        return result
