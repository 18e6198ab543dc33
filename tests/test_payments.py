"""Tests for payment proofs and their effect on the staff board."""

import uuid

import pytest
from httpx import AsyncClient

PROOF = {"proof": ("receipt.png", b"\x89PNG fake image bytes", "image/png")}


async def submit_proof(client: AsyncClient, order_number: str, **fields) -> dict:
    response = await client.post(
        "/api/v1/payments",
        data={"order_number": order_number, **fields},
        files=PROOF,
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_submit_payment_proof(client: AsyncClient, media_uploader) -> None:
    """A proof is uploaded to the media host and stored as pending."""
    payment = await submit_proof(
        client, "ORD-1", customer_name="Ravi", amount="1200", method="upi"
    )

    assert payment["status"] == "pending"
    assert payment["method"] == "upi"
    assert payment["amount"] == 1200
    assert payment["proof_url"] == "https://media.test/image/receipt.png"
    assert media_uploader.uploads[0]["content_type"] == "image/png"


@pytest.mark.asyncio
async def test_submit_payment_requires_proof(client: AsyncClient) -> None:
    """Submitting without a file is a bad request."""
    response = await client.post("/api/v1/payments", data={"order_number": "ORD-1"})
    assert response.status_code == 400
    assert response.json()["message"] == "No proof uploaded"


@pytest.mark.asyncio
async def test_list_payments_requires_role(
    client: AsyncClient, admin_headers, staff_headers
) -> None:
    """Admins and staff may list proofs; anonymous callers may not."""
    await submit_proof(client, "ORD-1")
    await submit_proof(client, "ORD-2")

    assert (await client.get("/api/v1/payments")).status_code == 401

    response = await client.get("/api/v1/payments", headers=staff_headers("A01"))
    assert response.status_code == 200
    assert [p["order_number"] for p in response.json()] == ["ORD-2", "ORD-1"]

    assert (await client.get("/api/v1/payments", headers=admin_headers)).status_code == 200


@pytest.mark.asyncio
async def test_moderate_payment(client: AsyncClient, admin_headers, staff_headers) -> None:
    """Only admins approve or reject proofs."""
    payment = await submit_proof(client, "ORD-1")

    forbidden = await client.patch(
        f"/api/v1/payments/{payment['id']}/approve", headers=staff_headers("A01")
    )
    assert forbidden.status_code == 401

    approved = await client.patch(f"/api/v1/payments/{payment['id']}/approve", headers=admin_headers)
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    rejected = await client.patch(f"/api/v1/payments/{payment['id']}/reject", headers=admin_headers)
    assert rejected.json()["status"] == "rejected"


@pytest.mark.asyncio
async def test_unknown_payment(client: AsyncClient, admin_headers) -> None:
    """Moderating or deleting a missing proof is 404."""
    missing = uuid.uuid4()
    response = await client.patch(f"/api/v1/payments/{missing}/approve", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Payment not found"

    response = await client.delete(f"/api/v1/payments/{missing}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_payment(client: AsyncClient, admin_headers) -> None:
    """Deleting removes the proof from the list."""
    payment = await submit_proof(client, "ORD-1")

    response = await client.delete(f"/api/v1/payments/{payment['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    listing = await client.get("/api/v1/payments", headers=admin_headers)
    assert listing.json() == []


@pytest.mark.asyncio
async def test_board_hides_unapproved_payments(
    client: AsyncClient, admin_headers, staff_headers, make_order
) -> None:
    """Orders with a pending or rejected proof stay off the staff board."""
    cash = await make_order(customer_name="Cash On Delivery")
    prepaid = await make_order(customer_name="Prepaid")
    payment = await submit_proof(client, prepaid)

    async def board_orders() -> set[str]:
        response = await client.get("/api/v1/staff/orders", headers=staff_headers("A01"))
        assert response.status_code == 200
        return {row["order_number"] for row in response.json()}

    assert await board_orders() == {cash}

    await client.patch(f"/api/v1/payments/{payment['id']}/reject", headers=admin_headers)
    assert await board_orders() == {cash}

    await client.patch(f"/api/v1/payments/{payment['id']}/approve", headers=admin_headers)
    assert await board_orders() == {cash, prepaid}
