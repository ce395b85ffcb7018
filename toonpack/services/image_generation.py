"""
Image Generation Service

HTTP client for the hosted image-to-image generation API.
"""

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


class ImageGenerationError(Exception):
    """The generation API rejected the request or answered with garbage."""


@dataclass
class OriginalImage:
    """A reference image passed to the generation API by URL."""
    url: str
    mime_type: str = "image/jpeg"


@dataclass
class GeneratedImage:
    """Generation result; ``url`` is None when the API produced nothing."""
    url: str | None


class ImageGenerationClient:
    """
    Client for the image generation API.

    Request body::

        {"prompt": "...", "original_images": [{"url": "...", "mime_type": "..."}]}

    Response body::

        {"url": "https://..."}
    """

    def __init__(self, api_url: str, api_key: str, http_client: httpx.AsyncClient):
        self.api_url = api_url
        self.api_key = api_key
        self.http = http_client

    async def generate_image(
        self,
        prompt: str,
        original_images: list[OriginalImage] | None = None,
    ) -> GeneratedImage:
        """
        Generate one image.

        Args:
            prompt: Text instruction
            original_images: Reference images for likeness

        Returns:
            GeneratedImage with the hosted result URL

        Raises:
            ImageGenerationError: On transport errors, non-2xx status or a
                body that is not JSON
        """
        payload = {
            "prompt": prompt,
            "original_images": [
                {"url": image.url, "mime_type": image.mime_type}
                for image in original_images or []
            ],
        }
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = await self.http.post(self.api_url, json=payload, headers=headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise ImageGenerationError(
                f"Image generation request failed ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise ImageGenerationError(f"Image generation request failed: {e}") from e
        except ValueError as e:
            raise ImageGenerationError("Image generation returned invalid JSON") from e

        url = body.get("url") if isinstance(body, dict) else None
        logger.debug(f"Image generation returned url={url}")
        return GeneratedImage(url=url or None)
