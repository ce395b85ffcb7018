"""Shared fixtures: in-memory database, fake storage and a fake generation API."""

import io

import httpx
import pytest
from PIL import Image
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from toonpack.database import Database
from toonpack.main import app
from toonpack.pipeline import StickerGenerator
from toonpack.services.image_generation import GeneratedImage, ImageGenerationError

ALICE = {"X-User-Open-Id": "alice"}
BOB = {"X-User-Open-Id": "bob"}

CDN_HOST = "cdn.test"
IMAGES_HOST = "images.test"


def make_png(width: int = 300, height: int = 150, color=(255, 0, 0, 255)) -> bytes:
    """Solid-color PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeStorage:
    """In-memory stand-in for StorageService."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return f"https://{CDN_HOST}/{key}"

    def delete_file(self, key: str) -> bool:
        self.deleted.append(key)
        return self.objects.pop(key, None) is not None

    def health_check(self) -> bool:
        return True

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self.objects if k.startswith(prefix)]


class FakeImageClient:
    """
    Generation API stand-in.

    Fails for any prompt containing one of ``fail_on``; answers without a
    URL when ``empty`` is set.
    """

    def __init__(self, fail_on: tuple[str, ...] = (), empty: bool = False):
        self.fail_on = fail_on
        self.empty = empty
        self.calls: list[tuple[str, list]] = []

    async def generate_image(self, prompt, original_images=None):
        self.calls.append((prompt, original_images))
        for phrase in self.fail_on:
            if phrase in prompt:
                raise ImageGenerationError("upstream exploded")
        if self.empty:
            return GeneratedImage(url=None)
        return GeneratedImage(url=f"https://{IMAGES_HOST}/generated/{len(self.calls)}.png")


def image_transport(storage: FakeStorage, generated: bytes | None = None) -> httpx.MockTransport:
    """Serve generated images and whatever is in the fake storage."""
    generated = generated if generated is not None else make_png()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == IMAGES_HOST:
            return httpx.Response(200, content=generated, headers={"content-type": "image/png"})
        if request.url.host == CDN_HOST:
            stored = storage.objects.get(request.url.path.lstrip("/"))
            if stored:
                return httpx.Response(200, content=stored[0], headers={"content-type": stored[1]})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
async def database():
    db = Database("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(db.engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await db.init()
    yield db
    await db.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def image_client():
    return FakeImageClient()


@pytest.fixture
async def http_client(storage):
    async with httpx.AsyncClient(transport=image_transport(storage)) as client:
        yield client


@pytest.fixture
def generator(image_client, http_client):
    return StickerGenerator(image_client, http_client)


@pytest.fixture
async def client(database, storage, generator, http_client):
    app.state.db = database
    app.state.storage = storage
    app.state.sticker_generator = generator
    app.state.http_client = http_client

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as api:
        yield api


async def upload_photo(client: httpx.AsyncClient, headers: dict) -> int:
    """Upload a reference photo and return its id."""
    response = await client.post(
        "/api/references",
        files={"file": ("me.jpg", make_png(), "image/jpeg")},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
