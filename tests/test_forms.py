"""Tests for inbound form submissions and newsletter sign-ups."""

import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "payload"),
    [
        ("/api/v1/contact", {"name": "Kiran", "email": "kiran@example.com", "message": "Hello"}),
        ("/api/v1/callbacks", {"name": "Kiran", "phone": "9800000000"}),
        ("/api/v1/enquiries", {"product_name": "Ghee", "name": "Kiran", "phone": "9800000000"}),
        (
            "/api/v1/participants",
            {"name": "Kiran", "role": "farmer", "email": "kiran@example.com"},
        ),
    ],
)
async def test_form_submission_lifecycle(
    client: AsyncClient, admin_headers, path: str, payload: dict
) -> None:
    """Anyone may submit; only admins list and delete."""
    created = await client.post(path, json=payload)
    assert created.status_code == 201
    item_id = created.json()["id"]

    assert (await client.get(path)).status_code == 401

    listing = await client.get(path, headers=admin_headers)
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [item_id]

    deleted = await client.delete(f"{path}/{item_id}", headers=admin_headers)
    assert deleted.status_code == 200

    missing = await client.delete(f"{path}/{item_id}", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_participant_validation(client: AsyncClient) -> None:
    """Participants need a known role and a valid email."""
    bad_role = await client.post(
        "/api/v1/participants",
        json={"name": "Kiran", "role": "judge", "email": "kiran@example.com"},
    )
    assert bad_role.status_code == 422

    bad_email = await client.post(
        "/api/v1/participants",
        json={"name": "Kiran", "role": "subscriber", "email": "not-an-email"},
    )
    assert bad_email.status_code == 422


@pytest.mark.asyncio
async def test_subscribe_upserts_sources(client: AsyncClient, admin_headers) -> None:
    """Repeat sign-ups merge sources onto one subscriber."""
    first = await client.post("/api/v1/subscribers", json={"email": "Leela@Example.com"})
    assert first.status_code == 201
    assert first.json()["email"] == "leela@example.com"
    assert first.json()["sources"] == ["footer"]

    again = await client.post(
        "/api/v1/subscribers", json={"email": "leela@example.com", "source": "Popup"}
    )
    assert again.status_code == 200
    assert again.json()["id"] == first.json()["id"]
    assert again.json()["sources"] == ["footer", "popup"]

    repeat = await client.post(
        "/api/v1/subscribers", json={"email": "leela@example.com", "source": "popup"}
    )
    assert repeat.status_code == 200
    assert repeat.json()["sources"] == ["footer", "popup"]

    listing = await client.get("/api/v1/subscribers", headers=admin_headers)
    assert len(listing.json()) == 1


@pytest.mark.asyncio
async def test_delete_subscriber(client: AsyncClient, admin_headers) -> None:
    """Subscribers can be removed; unknown ids are 404."""
    created = await client.post("/api/v1/subscribers", json={"email": "ravi@example.com"})

    response = await client.delete(
        f"/api/v1/subscribers/{created.json()['id']}", headers=admin_headers
    )
    assert response.status_code == 200

    response = await client.delete(f"/api/v1/subscribers/{uuid.uuid4()}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Subscriber not found"
