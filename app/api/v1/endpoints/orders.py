"""Order endpoints."""

from fastapi import APIRouter, Query, status

from app.core.order_flow import OrderStatus
from app.dependencies import AdminOrStaffPrincipal, DatabaseSession
from app.schemas.orders import OrderCreate, OrderResponse, OrderTrackingResponse
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
async def create_order(data: OrderCreate, db: DatabaseSession):
    """Place an order; it starts in ``pending`` with a generated order number."""
    return await OrderService(db).create_order(data)


@router.get("", response_model=list[OrderResponse], summary="List orders")
async def list_orders(
    db: DatabaseSession,
    principal: AdminOrStaffPrincipal,
    status_filter: OrderStatus | None = Query(None, alias="status", description="Filter by status"),
):
    """List orders newest first."""
    return await OrderService(db).list_orders(status_filter)


@router.get("/{order_number}", response_model=OrderTrackingResponse, summary="Track an order")
async def track_order(order_number: str, db: DatabaseSession):
    """Public status lookup by order number."""
    order = await OrderService(db).get_order(order_number)
    return OrderTrackingResponse(
        order_number=order.order_number,
        status=order.status,
        updated_at=order.updated_at,
    )
