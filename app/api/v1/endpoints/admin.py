"""Admin-only endpoints for workflow oversight."""

from fastapi import APIRouter

from app.dependencies import AdminPrincipal, DatabaseSession
from app.schemas.orders import OrderResponse, OrderStatusUpdate
from app.schemas.transfers import TransferResponse
from app.services.order_workflow_service import OrderWorkflowService
from app.services.transfer_service import TransferService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/transfers",
    response_model=list[TransferResponse],
    summary="List all transfers (admin only)",
)
async def list_all_transfers(db: DatabaseSession, admin: AdminPrincipal):
    """
    Every transfer request regardless of parties, newest first.

    Requires admin role.
    """
    return await TransferService(db).list_all()


@router.patch(
    "/orders/{order_number}/status",
    response_model=OrderResponse,
    summary="Set an order's status (admin only)",
)
async def set_order_status(
    order_number: str,
    data: OrderStatusUpdate,
    db: DatabaseSession,
    admin: AdminPrincipal,
) -> OrderResponse:
    """
    Set any status on an order, bypassing the forward-only rule.

    Args:
        order_number: Order to correct
        data: Target status
        db: Database session
        admin: Authenticated admin

    Returns:
        Updated order

    Raises:
        NotFoundException: If the order does not exist
    """
    return await OrderWorkflowService(db).admin_set_status(order_number, data.status)
