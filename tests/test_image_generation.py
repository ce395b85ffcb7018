"""Image generation API client."""

import json

import httpx
import pytest

from toonpack.services.image_generation import (
    ImageGenerationClient,
    ImageGenerationError,
    OriginalImage,
)

API_URL = "https://images.test/v1/images/generate"


def _client(handler, api_key: str = "secret") -> tuple[ImageGenerationClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ImageGenerationClient(API_URL, api_key, http), http


async def test_posts_prompt_and_reference_images():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"url": "https://images.test/out/1.png"})

    client, http = _client(handler)
    async with http:
        result = await client.generate_image(
            "a cartoon",
            [OriginalImage(url="https://cdn.test/me.jpg"), OriginalImage("https://cdn.test/me.png", "image/png")],
        )

    assert result.url == "https://images.test/out/1.png"
    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == API_URL
    assert request.headers["Authorization"] == "Bearer secret"
    assert json.loads(request.content) == {
        "prompt": "a cartoon",
        "original_images": [
            {"url": "https://cdn.test/me.jpg", "mime_type": "image/jpeg"},
            {"url": "https://cdn.test/me.png", "mime_type": "image/png"},
        ],
    }


async def test_no_authorization_header_without_key():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"url": "https://images.test/out/1.png"})

    client, http = _client(handler, api_key="")
    async with http:
        await client.generate_image("a cartoon")

    assert "Authorization" not in seen[0].headers
    assert json.loads(seen[0].content)["original_images"] == []


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": None}, ["not", "a", "dict"]])
async def test_missing_url_is_none(body):
    client, http = _client(lambda request: httpx.Response(200, json=body))
    async with http:
        result = await client.generate_image("a cartoon")

    assert result.url is None


async def test_error_status_is_wrapped():
    client, http = _client(lambda request: httpx.Response(429, json={"error": "slow down"}))
    async with http:
        with pytest.raises(ImageGenerationError, match=r"\(429\)"):
            await client.generate_image("a cartoon")


async def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, http = _client(handler)
    async with http:
        with pytest.raises(ImageGenerationError, match="connection refused"):
            await client.generate_image("a cartoon")


async def test_invalid_json_is_wrapped():
    client, http = _client(lambda request: httpx.Response(200, content=b"<html>gateway</html>"))
    async with http:
        with pytest.raises(ImageGenerationError, match="invalid JSON"):
            await client.generate_image("a cartoon")
