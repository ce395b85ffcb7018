"""Pack archive building."""

import io
import zipfile

import httpx
import pytest

from toonpack.pipeline.export import (
    README_NAME,
    PackExportError,
    StickerFile,
    create_sticker_zip,
    export_pack,
    sticker_filename,
)


def test_sticker_filename():
    assert sticker_filename(1, "happy") == "1_happy.png"
    assert sticker_filename(12, "thumbs up") == "12_thumbs up.png"
    assert sticker_filename(3, "yes/no") == "3_yes_no.png"
    assert sticker_filename(4, "..\\evil") == "4_.._evil.png"


def test_zip_holds_files_in_order_plus_guide():
    archive = create_sticker_zip(
        "My Faces",
        [("1_happy.png", b"one"), ("2_sad.png", b"two")],
    )

    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        assert zf.namelist() == [README_NAME, "1_happy.png", "2_sad.png"]
        assert zf.read("2_sad.png") == b"two"
        guide = zf.read(README_NAME).decode()

    assert guide.startswith("My Faces\n========\n")
    assert "2 sticker(s)" in guide
    assert "@Stickers" in guide
    assert "- 1_happy.png" in guide


def test_empty_pack_still_gets_a_guide():
    with zipfile.ZipFile(io.BytesIO(create_sticker_zip("Empty", []))) as zf:
        assert zf.namelist() == [README_NAME]
        assert "0 sticker(s)" in zf.read(README_NAME).decode()


async def test_export_pack_fetches_every_sticker_in_order():
    fetched = []

    def handler(request):
        fetched.append(str(request.url))
        return httpx.Response(200, content=request.url.path.encode())

    files = [
        StickerFile("1_cool.png", "https://cdn.test/a.png"),
        StickerFile("2_love.png", "https://cdn.test/b.png"),
    ]
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        archive = await export_pack("Pack", files, http)

    assert fetched == ["https://cdn.test/a.png", "https://cdn.test/b.png"]
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        assert zf.read("1_cool.png") == b"/a.png"
        assert zf.read("2_love.png") == b"/b.png"


async def test_export_pack_aborts_on_any_failed_fetch():
    def handler(request):
        if request.url.path == "/b.png":
            return httpx.Response(404)
        return httpx.Response(200, content=b"ok")

    files = [
        StickerFile("1_cool.png", "https://cdn.test/a.png"),
        StickerFile("2_love.png", "https://cdn.test/b.png"),
    ]
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(PackExportError, match="2_love.png"):
            await export_pack("Pack", files, http)
