"""Reference photo upload and sticker preview endpoints."""

import pytest

from tests.conftest import ALICE, BOB, FakeImageClient, make_png, upload_photo


async def test_upload_reference_stores_photo(client, storage):
    response = await client.post(
        "/api/references",
        files={"file": ("My Selfie.png", make_png(), "image/png")},
        headers=ALICE,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["original_filename"] == "My Selfie.png"
    assert body["mime_type"] == "image/png"

    [key] = storage.keys()
    assert key.startswith("1/references/My_Selfie-")
    assert key.endswith(".png")
    assert body["file_url"] == f"https://cdn.test/{key}"


async def test_upload_requires_identity(client, storage):
    response = await client.post(
        "/api/references",
        files={"file": ("me.jpg", make_png(), "image/jpeg")},
    )

    assert response.status_code == 401
    assert storage.objects == {}


async def test_upload_rejects_non_images(client, storage):
    response = await client.post(
        "/api/references",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=ALICE,
    )

    assert response.status_code == 400
    assert storage.objects == {}


async def test_upload_rejects_unsupported_extension(client, storage):
    response = await client.post(
        "/api/references",
        files={"file": ("me.gif", make_png(), "image/gif")},
        headers=ALICE,
    )

    assert response.status_code == 400
    assert "Invalid file type" in response.json()["detail"]
    assert storage.objects == {}


async def test_upload_rejects_oversized_files(client, storage):
    response = await client.post(
        "/api/references",
        files={"file": ("huge.jpg", b"\0" * (11 * 1024 * 1024), "image/jpeg")},
        headers=ALICE,
    )

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]
    assert storage.objects == {}


async def test_list_references_only_shows_own_photos(client):
    first = await upload_photo(client, ALICE)
    second = await upload_photo(client, ALICE)
    await upload_photo(client, BOB)

    response = await client.get("/api/references", headers=ALICE)

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [second, first]


async def test_preview_generates_and_stores_one_sticker(client, storage, image_client):
    photo_id = await upload_photo(client, ALICE)

    response = await client.post(
        f"/api/references/{photo_id}/preview",
        json={"emotion": "surprised", "style": "anime"},
        headers=ALICE,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["emotion"] == "surprised"
    [preview_key] = storage.keys("1/previews/")
    assert preview_key.startswith("1/previews/surprised-")
    assert body["url"] == f"https://cdn.test/{preview_key}"
    assert storage.objects[preview_key][1] == "image/png"
    assert len(image_client.calls) == 1


async def test_preview_with_someone_elses_photo_is_forbidden(client, storage, image_client):
    photo_id = await upload_photo(client, ALICE)
    stored_before = dict(storage.objects)

    response = await client.post(
        f"/api/references/{photo_id}/preview",
        json={"emotion": "happy"},
        headers=BOB,
    )

    assert response.status_code == 403
    assert image_client.calls == []
    assert storage.objects == stored_before


async def test_preview_unknown_photo_is_not_found(client, image_client):
    response = await client.post(
        "/api/references/999/preview",
        json={"emotion": "happy"},
        headers=ALICE,
    )

    assert response.status_code == 404
    assert image_client.calls == []


async def test_preview_surfaces_generation_failure(client, storage, generator):
    photo_id = await upload_photo(client, ALICE)
    generator.image_client = FakeImageClient(empty=True)

    response = await client.post(
        f"/api/references/{photo_id}/preview",
        json={"emotion": "happy"},
        headers=ALICE,
    )

    assert response.status_code == 502
    assert "Failed to generate sticker" in response.json()["detail"]
    assert storage.keys("1/previews/") == []


@pytest.mark.parametrize("emotion", ["", "   ", "\t\n"])
async def test_preview_rejects_blank_emotion(client, storage, image_client, emotion):
    photo_id = await upload_photo(client, ALICE)

    response = await client.post(
        f"/api/references/{photo_id}/preview",
        json={"emotion": emotion},
        headers=ALICE,
    )

    assert response.status_code == 422
    assert image_client.calls == []
    assert storage.keys("1/previews/") == []


async def test_preview_strips_emotion(client, image_client):
    photo_id = await upload_photo(client, ALICE)

    response = await client.post(
        f"/api/references/{photo_id}/preview",
        json={"emotion": "  sad "},
        headers=ALICE,
    )

    assert response.status_code == 200
    assert response.json()["emotion"] == "sad"
    assert "tears in eyes" in image_client.calls[0][0]
