"""Direct messages, doctor directory and patient deletion API tests."""

import base64

from httpx import AsyncClient

PNG_URI = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x04" * 8).decode()


async def test_message_history_is_symmetric(client: AsyncClient, seed, auth_headers) -> None:
    alice, bob = auth_headers(seed.alice), auth_headers(seed.bob)

    first = await client.post(
        "/api/v1/messages", headers=alice, data={"receiver_id": seed.bob, "message": " hello "}
    )
    second = await client.post(
        "/api/v1/messages", headers=bob, data={"receiver_id": seed.alice, "message": "hi back"}
    )
    assert first.status_code == second.status_code == 201
    assert first.json()["message"] == "hello"
    assert first.json()["read"] is False
    assert first.json()["receiver"]["name"] == "Bob Byaruhanga"

    from_alice = (await client.get(f"/api/v1/messages/{seed.bob}", headers=alice)).json()
    from_bob = (await client.get(f"/api/v1/messages/{seed.alice}", headers=bob)).json()

    assert [m["id"] for m in from_alice] == [first.json()["id"], second.json()["id"]]
    assert [m["id"] for m in from_bob] == [m["id"] for m in from_alice]


async def test_invalid_messages_rejected(client: AsyncClient, seed, auth_headers) -> None:
    alice = auth_headers(seed.alice)

    blank = await client.post(
        "/api/v1/messages", headers=alice, data={"receiver_id": seed.bob, "message": "   "}
    )
    to_self = await client.post(
        "/api/v1/messages", headers=alice, data={"receiver_id": seed.alice, "message": "me"}
    )
    unknown = await client.post(
        "/api/v1/messages", headers=alice, data={"receiver_id": "ghost", "message": "hello"}
    )

    assert blank.status_code == 400
    assert to_self.status_code == 400
    assert unknown.status_code == 404
    history = await client.get(f"/api/v1/messages/{seed.bob}", headers=alice)
    assert history.json() == []


async def test_message_with_image_attachment(client: AsyncClient, seed, auth_headers) -> None:
    response = await client.post(
        "/api/v1/messages",
        headers=auth_headers(seed.carol),
        data={"receiver_id": seed.bob, "message": "photo attached"},
        files={"image": ("otoscope.png", base64.b64decode(PNG_URI.split(",", 1)[1]), "image/png")},
    )
    assert response.status_code == 201, response.text
    assert response.json()["image_url"].startswith("/uploads/local-")


async def test_history_with_unknown_identity_is_not_found(client: AsyncClient, seed, auth_headers) -> None:
    response = await client.get("/api/v1/messages/ghost", headers=auth_headers(seed.alice))
    assert response.status_code == 404


async def test_doctor_directory_excludes_caller(client: AsyncClient, seed, auth_headers) -> None:
    response = await client.get("/api/v1/users/doctors", headers=auth_headers(seed.alice))
    assert response.status_code == 200
    doctors = response.json()
    assert [d["id"] for d in doctors] == [seed.bob, seed.carol]
    assert doctors[0]["specialty"] == "Audiology"


async def test_patient_delete_cascades_media(client: AsyncClient, seed, auth_headers, local_store) -> None:
    alice, bob = auth_headers(seed.alice), auth_headers(seed.bob)
    ids = []
    for _ in range(2):
        response = await client.post(
            "/api/v1/images",
            headers=alice,
            data={"patient_id": seed.alice_patient, "image_data": PNG_URI},
        )
        ids.append(response.json()["id"])
    await client.post(
        f"/api/v1/images/{ids[0]}/share", headers=alice, json={"doctor_ids": [seed.bob]}
    )

    foreign = await client.delete(f"/api/v1/patients/{seed.alice_patient}", headers=bob)
    assert foreign.status_code == 404

    response = await client.delete(f"/api/v1/patients/{seed.alice_patient}", headers=alice)

    assert response.status_code == 200
    assert response.json() == {"id": seed.alice_patient, "deleted_media": 2}
    for media_id in ids:
        assert (await client.get(f"/api/v1/images/{media_id}", headers=alice)).status_code == 404
    assert (await client.get("/api/v1/images/shared", headers=bob)).json() == []
    assert list(local_store.storage_root.iterdir()) == []
