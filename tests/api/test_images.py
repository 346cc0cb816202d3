"""Images API tests: upload with local fallback, access denial as 404, sharing, comments, deletion."""

import base64
import os
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_upload_coordinator
from app.application.services.upload_coordinator import UploadCoordinator
from app.infrastructure.exceptions import StorageUploadError, UpstreamTransientError
from app.infrastructure.external.storage.local_media_store import LocalMediaStore
from app.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x03" * 48
PNG_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()


async def _upload(client: AsyncClient, headers: dict[str, str], patient_id: str, **extra) -> dict:
    response = await client.post(
        "/api/v1/images",
        headers=headers,
        data={"patient_id": patient_id, "image_data": PNG_URI, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_requests_without_token_are_rejected(client: AsyncClient) -> None:
    response = await client.get("/api/v1/images/shared")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_token_for_unknown_identity_rejected(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/images/shared", headers=auth_headers("ghost"))
    assert response.status_code == 401


async def test_inline_upload_falls_back_to_local(client: AsyncClient, seed, auth_headers) -> None:
    body = await _upload(
        client, auth_headers(seed.alice), seed.alice_patient,
        notes="left TM bulging", captured_at="2025-03-01T09:30:00Z",
    )

    assert body["storage_kind"] == "local"
    assert body["image_url"].startswith("/uploads/local-")
    assert body["patient_id"] == seed.alice_patient
    assert body["owner_id"] == seed.alice
    assert body["notes"] == "left TM bulging"
    assert body["shared_with"] == []
    assert body["captured_at"].startswith("2025-03-01T09:30:00")


async def test_multipart_file_upload(client: AsyncClient, seed, auth_headers) -> None:
    response = await client.post(
        "/api/v1/images",
        headers=auth_headers(seed.alice),
        data={"patient_id": seed.alice_patient},
        files={"image": ("ear.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 201, response.text
    assert response.json()["image_url"].endswith(".png")


async def test_upload_for_foreign_patient_is_not_found(client: AsyncClient, seed, auth_headers) -> None:
    response = await client.post(
        "/api/v1/images",
        headers=auth_headers(seed.alice),
        data={"patient_id": seed.bob_patient, "image_data": PNG_URI},
    )
    assert response.status_code == 404


async def test_upload_rejects_missing_and_non_image_payloads(client: AsyncClient, seed, auth_headers) -> None:
    headers = auth_headers(seed.alice)
    missing = await client.post(
        "/api/v1/images", headers=headers, data={"patient_id": seed.alice_patient}
    )
    assert missing.status_code == 400
    assert missing.json()["error"] == "VALIDATION_ERROR"

    pdf = await client.post(
        "/api/v1/images",
        headers=headers,
        data={"patient_id": seed.alice_patient},
        files={"image": ("report.pdf", b"%PDF-1.7", "application/pdf")},
    )
    assert pdf.status_code == 400


async def test_storage_unavailable_returns_503_and_creates_nothing(
    client: AsyncClient, seed, auth_headers
) -> None:
    primary = AsyncMock()
    primary.upload = AsyncMock(side_effect=UpstreamTransientError("upload", "down"))
    local = AsyncMock()
    local.write = AsyncMock(side_effect=StorageUploadError("local-x.png", "disk full"))

    async def no_sleep(_: float) -> None:
        return None

    failing = UploadCoordinator(primary, local, sleep=no_sleep)
    app.dependency_overrides[get_upload_coordinator] = lambda: failing
    headers = auth_headers(seed.alice)

    response = await client.post(
        "/api/v1/images",
        headers=headers,
        data={"patient_id": seed.alice_patient, "image_data": PNG_URI},
    )

    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "STORAGE_UNAVAILABLE"
    assert "could not be saved" in body["message"]
    assert primary.upload.await_count == 3
    listing = await client.get(f"/api/v1/images/patient/{seed.alice_patient}", headers=headers)
    assert listing.json() == []


async def test_local_fallback_locator_is_served(client: AsyncClient, seed, auth_headers) -> None:
    """Bytes written by the fallback tier are retrievable at the returned locator."""
    served = UploadCoordinator(primary=None, local=LocalMediaStore(os.environ["STORAGE_ROOT"]))
    app.dependency_overrides[get_upload_coordinator] = lambda: served

    body = await _upload(client, auth_headers(seed.alice), seed.alice_patient)
    response = await client.get(body["image_url"])

    assert response.status_code == 200
    assert response.content == PNG_BYTES
    assert response.headers["cross-origin-resource-policy"] == "cross-origin"


async def test_denied_read_is_indistinguishable_from_missing(
    client: AsyncClient, seed, auth_headers
) -> None:
    media = await _upload(client, auth_headers(seed.alice), seed.alice_patient)
    media_id = media["id"]

    denied = await client.get(f"/api/v1/images/{media_id}", headers=auth_headers(seed.carol))
    missing = await client.get("/api/v1/images/does-not-exist", headers=auth_headers(seed.carol))

    assert denied.status_code == missing.status_code == 404
    assert denied.json() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": f"media not found: {media_id}",
        "details": {"resource_type": "media", "resource_id": media_id},
    }
    assert missing.json() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "media not found: does-not-exist",
        "details": {"resource_type": "media", "resource_id": "does-not-exist"},
    }


async def test_share_then_read_comment_and_list(client: AsyncClient, seed, auth_headers) -> None:
    alice, bob, carol = auth_headers(seed.alice), auth_headers(seed.bob), auth_headers(seed.carol)
    media_id = (await _upload(client, alice, seed.alice_patient))["id"]

    shared = await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": [seed.bob]}
    )
    again = await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": [seed.bob]}
    )
    assert shared.status_code == again.status_code == 200
    assert again.json()["shared_with"] == [seed.bob]

    assert (await client.get(f"/api/v1/images/{media_id}", headers=bob)).status_code == 200
    inbox = (await client.get("/api/v1/images/shared", headers=bob)).json()
    assert [m["id"] for m in inbox] == [media_id]
    assert inbox[0]["owner"]["name"] == "Alice Achieng"
    assert inbox[0]["owner"]["specialty"] == "ENT"

    posted = await client.post(
        f"/api/v1/images/{media_id}/comments", headers=bob, data={"message": "Agree, AOM"}
    )
    assert posted.status_code == 201
    assert posted.json()["author"]["name"] == "Bob Byaruhanga"

    with_image = await client.post(
        f"/api/v1/images/{media_id}/comments", headers=alice, data={"image_data": PNG_URI}
    )
    assert with_image.status_code == 201
    assert with_image.json()["message"] is None
    assert with_image.json()["image_url"].startswith("/uploads/")

    stranger = await client.post(
        f"/api/v1/images/{media_id}/comments", headers=carol, data={"message": "hi"}
    )
    assert stranger.status_code == 404

    thread = (await client.get(f"/api/v1/images/{media_id}/comments", headers=alice)).json()
    assert [c["author_id"] for c in thread] == [seed.bob, seed.alice]


async def test_empty_comment_rejected(client: AsyncClient, seed, auth_headers) -> None:
    alice = auth_headers(seed.alice)
    media_id = (await _upload(client, alice, seed.alice_patient))["id"]

    response = await client.post(
        f"/api/v1/images/{media_id}/comments", headers=alice, data={"message": "   "}
    )

    assert response.status_code == 400


async def test_only_owner_can_share(client: AsyncClient, seed, auth_headers) -> None:
    alice, bob = auth_headers(seed.alice), auth_headers(seed.bob)
    media_id = (await _upload(client, alice, seed.alice_patient))["id"]
    await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": [seed.bob]}
    )

    response = await client.post(
        f"/api/v1/images/{media_id}/share", headers=bob, json={"doctor_ids": [seed.carol]}
    )
    assert response.status_code == 404

    unknown = await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": ["ghost"]}
    )
    assert unknown.status_code == 404

    empty = await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": []}
    )
    assert empty.status_code == 422


@pytest.mark.parametrize("caller", ["bob", "carol"])
async def test_non_owner_cannot_delete(client: AsyncClient, seed, auth_headers, caller: str) -> None:
    alice = auth_headers(seed.alice)
    media_id = (await _upload(client, alice, seed.alice_patient))["id"]
    await client.post(
        f"/api/v1/images/{media_id}/share", headers=alice, json={"doctor_ids": [seed.bob]}
    )

    response = await client.delete(
        f"/api/v1/images/{media_id}", headers=auth_headers(getattr(seed, caller))
    )

    assert response.status_code == 404
    assert (await client.get(f"/api/v1/images/{media_id}", headers=alice)).status_code == 200


async def test_owner_delete_removes_record_and_bytes(
    client: AsyncClient, seed, auth_headers, local_store
) -> None:
    alice = auth_headers(seed.alice)
    media = await _upload(client, alice, seed.alice_patient)
    filename = media["image_url"].rsplit("/", 1)[1]
    assert (local_store.storage_root / filename).exists()

    response = await client.delete(f"/api/v1/images/{media['id']}", headers=alice)

    assert response.status_code == 204
    assert not (local_store.storage_root / filename).exists()
    assert (await client.get(f"/api/v1/images/{media['id']}", headers=alice)).status_code == 404


async def test_patient_listing_newest_first(client: AsyncClient, seed, auth_headers) -> None:
    alice = auth_headers(seed.alice)
    older = await _upload(client, alice, seed.alice_patient, captured_at="2025-01-01T08:00:00Z")
    newer = await _upload(client, alice, seed.alice_patient, captured_at="2025-02-01T08:00:00Z")

    listing = await client.get(f"/api/v1/images/patient/{seed.alice_patient}", headers=alice)

    assert [m["id"] for m in listing.json()] == [newer["id"], older["id"]]
    foreign = await client.get(
        f"/api/v1/images/patient/{seed.alice_patient}", headers=auth_headers(seed.bob)
    )
    assert foreign.status_code == 404
