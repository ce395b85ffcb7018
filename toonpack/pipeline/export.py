"""
Pack Export

Bundle a pack's stickers into a ZIP archive with a short guide for
publishing them through Telegram's @Stickers bot.
"""

import io
import logging
import zipfile
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

README_NAME = "README.txt"

GUIDE_TEMPLATE = """\
{name}
{underline}

{count} sticker(s), 512x512 PNG with transparent background.

How to publish this pack on Telegram
------------------------------------
1. Open a chat with @Stickers.
2. Send /newpack and choose "Static stickers".
3. Send the pack name: {name}
4. For each PNG file in this archive:
   - send the file as a document (not as a photo),
   - then send one or more emoji that match the sticker.
5. Send /publish, optionally upload an icon, then choose a short name.
   The pack will be available at https://t.me/addstickers/<short name>

Files
-----
{files}
"""


class PackExportError(Exception):
    """A sticker image could not be fetched for export."""


@dataclass
class StickerFile:
    """One archive entry: the name inside the ZIP and where to fetch it."""
    filename: str
    url: str


def sticker_filename(index: int, emotion: str) -> str:
    """
    Archive name for the sticker at 1-based ``index``.

    Path separators in the emotion are replaced so every entry stays at the
    archive root.
    """
    safe_emotion = emotion.replace("/", "_").replace("\\", "_")
    return f"{index}_{safe_emotion}.png"


def build_guide(pack_name: str, filenames: list[str]) -> str:
    """Render the plaintext usage guide shipped in every archive."""
    return GUIDE_TEMPLATE.format(
        name=pack_name,
        underline="=" * len(pack_name),
        count=len(filenames),
        files="\n".join(f"- {name}" for name in filenames) or "(none)",
    )


def create_sticker_zip(pack_name: str, files: list[tuple[str, bytes]]) -> bytes:
    """
    Pack sticker images and the guide into a ZIP archive.

    Args:
        pack_name: Pack name, used in the guide
        files: (filename, bytes) pairs in pack order

    Returns:
        ZIP archive bytes
    """
    zip_buffer = io.BytesIO()

    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        zip_file.writestr(README_NAME, build_guide(pack_name, [name for name, _ in files]))
        for filename, data in files:
            zip_file.writestr(filename, data)

    return zip_buffer.getvalue()


async def export_pack(
    pack_name: str,
    files: list[StickerFile],
    http_client: httpx.AsyncClient,
) -> bytes:
    """
    Fetch every sticker image and build the pack archive.

    Any failed fetch aborts the whole export.

    Raises:
        PackExportError: If a sticker image cannot be fetched
    """
    contents = []
    for sticker in files:
        try:
            response = await http_client.get(sticker.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {sticker.url} for export: {e}")
            raise PackExportError(f"Failed to fetch sticker {sticker.filename}") from e
        contents.append((sticker.filename, response.content))

    archive = create_sticker_zip(pack_name, contents)
    logger.info(f"Exported pack '{pack_name}': {len(contents)} stickers, {len(archive)} bytes")
    return archive
