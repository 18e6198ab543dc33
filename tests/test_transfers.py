"""Tests for the transfer request handshake."""

import asyncio

import pytest
from httpx import AsyncClient
from sqlalchemy import func, insert, select

from app.core.exceptions import ConflictException
from app.models.transfer_requests import transfer_requests
from app.services.assignment_service import AssignmentService
from app.services.transfer_service import TransferService


async def claim(client: AsyncClient, headers: dict, order_number: str) -> None:
    response = await client.post(
        "/api/v1/staff/assign", json={"order_number": order_number}, headers=headers
    )
    assert response.status_code == 201


async def propose(client: AsyncClient, headers: dict, order_number: str, to_staff: str):
    return await client.post(
        "/api/v1/staff/transfers",
        json={"order_number": order_number, "to_staff": to_staff},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_propose_transfer(client: AsyncClient, staff_headers, staff_members) -> None:
    """The holder can propose a transfer to another active staff member."""
    await claim(client, staff_headers("A01"), "ORD-1001")

    response = await propose(client, staff_headers("A01"), "ORD-1001", "b02")
    assert response.status_code == 201
    data = response.json()
    assert data["from_staff"] == "A01"
    assert data["to_staff"] == "B02"
    assert data["status"] == "pending"
    assert data["decided_at"] is None


@pytest.mark.asyncio
async def test_only_holder_can_propose(client: AsyncClient, staff_headers, staff_members) -> None:
    """Non-holders are forbidden from proposing."""
    await claim(client, staff_headers("A01"), "ORD-1001")

    response = await propose(client, staff_headers("C03"), "ORD-1001", "B02")
    assert response.status_code == 403
    assert response.json()["message"] == "You do not own this assignment"


@pytest.mark.asyncio
async def test_propose_for_unassigned_order_is_forbidden(
    client: AsyncClient, staff_headers, staff_members
) -> None:
    """Nobody holds an unclaimed order."""
    response = await propose(client, staff_headers("A01"), "ORD-404", "B02")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_duplicate_pending_transfer_conflicts(
    client: AsyncClient, staff_headers, staff_members
) -> None:
    """Only one pending proposal may exist per order."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    assert (await propose(client, staff_headers("A01"), "ORD-1001", "B02")).status_code == 201

    response = await propose(client, staff_headers("A01"), "ORD-1001", "C03")
    assert response.status_code == 409
    assert response.json()["message"] == "Transfer already pending"


@pytest.mark.asyncio
async def test_cannot_transfer_to_self(client: AsyncClient, staff_headers, staff_members) -> None:
    """Self transfer is a bad request."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    response = await propose(client, staff_headers("A01"), "ORD-1001", "A01")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cannot_transfer_to_unknown_staff(
    client: AsyncClient, staff_headers, staff_members
) -> None:
    """The target must be an active staff code."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    response = await propose(client, staff_headers("A01"), "ORD-1001", "Z99")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_accept_moves_assignment(client: AsyncClient, staff_headers, staff_members) -> None:
    """Accepting hands the order to the target; re-accepting is rejected."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    transfer = (await propose(client, staff_headers("A01"), "ORD-1001", "B02")).json()

    response = await client.post(
        f"/api/v1/staff/transfers/{transfer['id']}/accept", headers=staff_headers("B02")
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["transfer"]["status"] == "accepted"
    assert body["transfer"]["decided_at"] is not None

    a_active = await client.get("/api/v1/staff/my-assignments", headers=staff_headers("A01"))
    b_active = await client.get("/api/v1/staff/my-assignments", headers=staff_headers("B02"))
    assert a_active.json() == []
    assert [a["order_number"] for a in b_active.json()] == ["ORD-1001"]

    again = await client.post(
        f"/api/v1/staff/transfers/{transfer['id']}/accept", headers=staff_headers("B02")
    )
    assert again.status_code == 400
    assert again.json()["message"] == "Already decided"


@pytest.mark.asyncio
async def test_only_target_can_decide(client: AsyncClient, staff_headers, staff_members) -> None:
    """Neither the proposer nor a bystander may decide."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    transfer = (await propose(client, staff_headers("A01"), "ORD-1001", "B02")).json()

    for code in ("A01", "C03"):
        response = await client.post(
            f"/api/v1/staff/transfers/{transfer['id']}/accept", headers=staff_headers(code)
        )
        assert response.status_code == 403
        assert response.json()["message"] == "Not your transfer"


@pytest.mark.asyncio
async def test_unknown_transfer(client: AsyncClient, staff_headers) -> None:
    """Deciding a missing request is 404."""
    response = await client.post(
        "/api/v1/staff/transfers/00000000-0000-0000-0000-000000000000/accept",
        headers=staff_headers("B02"),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_stale_accept_conflicts(client: AsyncClient, staff_headers, staff_members) -> None:
    """If the proposer completed the order meanwhile, accept is a conflict."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    transfer = (await propose(client, staff_headers("A01"), "ORD-1001", "B02")).json()
    await client.post(
        "/api/v1/staff/complete", json={"order_number": "ORD-1001"}, headers=staff_headers("A01")
    )

    response = await client.post(
        f"/api/v1/staff/transfers/{transfer['id']}/accept", headers=staff_headers("B02")
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Assignment no longer valid"

    # No mutation: request still pending, B02 holds nothing
    mine = await client.get("/api/v1/staff/transfers", headers=staff_headers("B02"))
    assert mine.json()[0]["status"] == "pending"
    b_active = await client.get("/api/v1/staff/my-assignments", headers=staff_headers("B02"))
    assert b_active.json() == []


@pytest.mark.asyncio
async def test_reject_leaves_assignment(client: AsyncClient, staff_headers, staff_members) -> None:
    """Rejecting keeps the order with the proposer and frees a new proposal."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    transfer = (await propose(client, staff_headers("A01"), "ORD-1001", "B02")).json()

    response = await client.post(
        f"/api/v1/staff/transfers/{transfer['id']}/reject", headers=staff_headers("B02")
    )
    assert response.status_code == 200
    assert response.json()["transfer"]["status"] == "rejected"

    a_active = await client.get("/api/v1/staff/my-assignments", headers=staff_headers("A01"))
    assert [a["order_number"] for a in a_active.json()] == ["ORD-1001"]

    retry = await propose(client, staff_headers("A01"), "ORD-1001", "C03")
    assert retry.status_code == 201


@pytest.mark.asyncio
async def test_list_my_transfers(client: AsyncClient, staff_headers, staff_members) -> None:
    """Both parties see the request; bystanders do not."""
    await claim(client, staff_headers("A01"), "ORD-1001")
    await propose(client, staff_headers("A01"), "ORD-1001", "B02")

    for code, expected in (("A01", 1), ("B02", 1), ("C03", 0)):
        response = await client.get("/api/v1/staff/transfers", headers=staff_headers(code))
        assert response.status_code == 200
        assert len(response.json()) == expected


@pytest.mark.asyncio
async def test_admin_lists_all_transfers(
    client: AsyncClient, staff_headers, staff_members, admin_headers
) -> None:
    """Admins see every request, newest first."""
    await claim(client, staff_headers("A01"), "ORD-1")
    await claim(client, staff_headers("B02"), "ORD-2")
    await propose(client, staff_headers("A01"), "ORD-1", "C03")
    await propose(client, staff_headers("B02"), "ORD-2", "C03")

    response = await client.get("/api/v1/admin/transfers", headers=admin_headers)
    assert response.status_code == 200
    assert [t["order_number"] for t in response.json()] == ["ORD-2", "ORD-1"]


@pytest.mark.asyncio
async def test_accept_retry_after_ledger_moved(db_session, staff_members) -> None:
    """A pending request whose ledger move already happened completes on retry."""
    await AssignmentService(db_session).claim("ORD-1001", "B02")
    result = await db_session.execute(
        insert(transfer_requests)
        .values(order_number="ORD-1001", from_staff="A01", to_staff="B02", status="pending")
        .returning(transfer_requests.c.id)
    )
    transfer_id = result.scalar_one()
    await db_session.commit()

    decided = await TransferService(db_session).accept(transfer_id, "B02")
    assert decided.status.value == "accepted"

    holder = await AssignmentService(db_session).get_active("ORD-1001")
    assert holder.staff_code == "B02"


async def count_pending(db_session, order_number: str) -> int:
    result = await db_session.execute(
        select(func.count())
        .select_from(transfer_requests)
        .where(
            transfer_requests.c.order_number == order_number,
            transfer_requests.c.status == "pending",
        )
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_concurrent_proposals_single_pending(
    session_factory, db_session, staff_members
) -> None:
    """Two proposals racing on separate sessions leave one pending request."""
    await AssignmentService(db_session).claim("ORD-1001", "A01")

    async def propose_in_own_session(to_staff: str):
        async with session_factory() as session:
            try:
                return await TransferService(session).propose("ORD-1001", "A01", to_staff)
            except ConflictException as e:
                return e

    results = await asyncio.gather(propose_in_own_session("B02"), propose_in_own_session("C03"))

    conflicts = [r for r in results if isinstance(r, ConflictException)]
    assert len(conflicts) == 1
    assert await count_pending(db_session, "ORD-1001") == 1


@pytest.mark.asyncio
async def test_proposal_past_precheck_hits_pending_index(
    db_session, staff_members, monkeypatch
) -> None:
    """A second proposal that skips the lookup is stopped by the partial unique index."""
    await AssignmentService(db_session).claim("ORD-1001", "A01")
    service = TransferService(db_session)
    await service.propose("ORD-1001", "A01", "B02")

    async def no_pending(self, order_number: str):
        return None

    monkeypatch.setattr(TransferService, "_get_pending", no_pending)

    with pytest.raises(ConflictException) as exc_info:
        await service.propose("ORD-1001", "A01", "C03")
    assert exc_info.value.message == "Transfer already pending"
    assert await count_pending(db_session, "ORD-1001") == 1


@pytest.mark.asyncio
async def test_decided_requests_do_not_block_new_proposals(db_session, staff_members) -> None:
    """The pending index only covers pending rows."""
    await AssignmentService(db_session).claim("ORD-1001", "A01")
    service = TransferService(db_session)

    first = await service.propose("ORD-1001", "A01", "B02")
    await service.reject(first.id, "B02")
    second = await service.propose("ORD-1001", "A01", "C03")

    assert second.status.value == "pending"
    assert await count_pending(db_session, "ORD-1001") == 1
