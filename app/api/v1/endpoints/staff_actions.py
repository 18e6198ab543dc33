"""Staff status action log endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import AdminOrStaffPrincipal, DatabaseSession, StaffPrincipal
from app.schemas.staff_actions import StatusActionCreate, StatusActionResponse
from app.services.order_workflow_service import OrderWorkflowService
from app.services.status_action_service import StatusActionService

router = APIRouter(prefix="/staff-actions", tags=["Staff Actions"])


@router.post(
    "",
    response_model=StatusActionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a status action",
)
async def record_status_action(
    data: StatusActionCreate,
    db: DatabaseSession,
    staff: StaffPrincipal,
):
    """
    Log a status change made by the caller.

    The new status must be strictly ahead of the order's effective progress.

    Raises:
        BadRequestException: If the move is not forward
    """
    return await OrderWorkflowService(db).record_status_action(data, staff.staff_code)


@router.get(
    "",
    response_model=dict[str, StatusActionResponse],
    summary="Latest status action per order",
)
async def latest_status_actions(
    db: DatabaseSession,
    principal: AdminOrStaffPrincipal,
    order_numbers: str = Query("", description="Comma-separated order numbers"),
):
    """Map of order number to its most recent action; orders without one are omitted."""
    numbers = [number.strip() for number in order_numbers.split(",") if number.strip()]
    return await StatusActionService(db).latest_per_order(numbers)
