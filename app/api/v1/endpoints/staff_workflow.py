"""Staff order workflow endpoints: claims, transfers and status moves."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import DatabaseSession, StaffPrincipal
from app.schemas.assignments import (
    AssignmentResponse,
    ClaimOrderRequest,
    CompleteAssignmentRequest,
)
from app.schemas.orders import OrderResponse, OrderStatusUpdate, StaffOrderView
from app.schemas.transfers import TransferCreate, TransferDecisionResponse, TransferResponse
from app.services.assignment_service import AssignmentService
from app.services.order_workflow_service import OrderWorkflowService
from app.services.transfer_service import TransferService

router = APIRouter(prefix="/staff", tags=["Staff Workflow"])


# ============================================================================
# Assignments
# ============================================================================


@router.post(
    "/assign",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Claim an order",
)
async def claim_order(data: ClaimOrderRequest, db: DatabaseSession, staff: StaffPrincipal):
    """
    Claim an unassigned order for the calling staff member.

    Raises:
        ConflictException: If the order already has an active assignment
    """
    return await AssignmentService(db).claim(data.order_number, staff.staff_code, data.order_id)


@router.get(
    "/my-assignments",
    response_model=list[AssignmentResponse],
    summary="My active assignments",
)
async def my_assignments(db: DatabaseSession, staff: StaffPrincipal):
    """Orders the caller currently holds, most recently claimed first."""
    return await AssignmentService(db).list_active(staff.staff_code)


@router.get(
    "/my-completed",
    response_model=list[AssignmentResponse],
    summary="My completed assignments",
)
async def my_completed(db: DatabaseSession, staff: StaffPrincipal):
    """Orders the caller has completed, most recently completed first."""
    return await AssignmentService(db).list_completed(staff.staff_code)


@router.post("/complete", response_model=AssignmentResponse, summary="Complete my assignment")
async def complete_assignment(
    data: CompleteAssignmentRequest,
    db: DatabaseSession,
    staff: StaffPrincipal,
):
    """
    Mark the caller's own active assignment completed.

    Raises:
        NotFoundException: If the caller holds no active assignment for the order
    """
    return await AssignmentService(db).complete(data.order_number, staff.staff_code)


# ============================================================================
# Transfers
# ============================================================================


@router.post(
    "/transfers",
    response_model=TransferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Propose a transfer",
)
async def propose_transfer(data: TransferCreate, db: DatabaseSession, staff: StaffPrincipal):
    """
    Offer one of the caller's orders to another staff member.

    Raises:
        BadRequestException: If the target is the caller or not an active staff code
        ForbiddenException: If the caller does not hold the order
        ConflictException: If a transfer for the order is already pending
    """
    return await TransferService(db).propose(data.order_number, staff.staff_code, data.to_staff)


@router.get("/transfers", response_model=list[TransferResponse], summary="My transfers")
async def my_transfers(db: DatabaseSession, staff: StaffPrincipal):
    """Transfers the caller proposed or received, newest first."""
    return await TransferService(db).list_mine(staff.staff_code)


@router.post(
    "/transfers/{transfer_id}/accept",
    response_model=TransferDecisionResponse,
    summary="Accept a transfer",
)
async def accept_transfer(transfer_id: UUID, db: DatabaseSession, staff: StaffPrincipal):
    """
    Accept a pending transfer addressed to the caller.

    On success the order's active assignment moves to the caller.
    """
    transfer = await TransferService(db).accept(transfer_id, staff.staff_code)
    return TransferDecisionResponse(transfer=transfer)


@router.post(
    "/transfers/{transfer_id}/reject",
    response_model=TransferDecisionResponse,
    summary="Reject a transfer",
)
async def reject_transfer(transfer_id: UUID, db: DatabaseSession, staff: StaffPrincipal):
    """Decline a pending transfer addressed to the caller."""
    transfer = await TransferService(db).reject(transfer_id, staff.staff_code)
    return TransferDecisionResponse(transfer=transfer)


# ============================================================================
# Orders
# ============================================================================


@router.get("/orders", response_model=list[StaffOrderView], summary="Staff order board")
async def staff_orders(db: DatabaseSession, staff: StaffPrincipal):
    """
    Orders ready for fulfilment.

    Includes cash-on-delivery orders and orders whose payment proof was
    approved, each with its effective progress, last actor and holder.
    """
    return await OrderWorkflowService(db).staff_board()


@router.patch(
    "/orders/{order_number}/status",
    response_model=OrderResponse,
    summary="Move an order forward",
)
async def move_order_status(
    order_number: str,
    data: OrderStatusUpdate,
    db: DatabaseSession,
    staff: StaffPrincipal,
):
    """
    Advance an order's status and log the action.

    Raises:
        NotFoundException: If the order does not exist
        BadRequestException: If the target is not ahead of the order's progress
    """
    return await OrderWorkflowService(db).staff_move_status(order_number, data.status, staff.staff_code)
