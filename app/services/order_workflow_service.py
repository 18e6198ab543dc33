"""Staff and admin order status moves.

Staff moves must go strictly forward from the order's effective progress,
the furthest of the order record and the latest logged staff action.
Admins may set any status.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import BadRequestException
from app.core.order_flow import OrderStatus, can_move_to, effective_progress, progress_status
from app.schemas.orders import OrderResponse, StaffOrderView
from app.schemas.payments import PaymentStatus
from app.schemas.staff_actions import StatusActionCreate, StatusActionResponse
from app.services.assignment_service import AssignmentService
from app.services.order_service import OrderService
from app.services.payment_service import PaymentService
from app.services.status_action_service import StatusActionService

logger = get_logger(__name__)


class OrderWorkflowService:
    """Service composing the order store, action log and assignment ledger."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.orders = OrderService(db)
        self.actions = StatusActionService(db)
        self.assignments = AssignmentService(db)

    async def get_progress(self, order_number: str, order_status: str | None = None) -> int:
        """Effective progress index for an order."""
        if order_status is None:
            order_status = await self.orders.get_status(order_number)
        latest = await self.actions.latest_for_order(order_number)
        return effective_progress(order_status, latest.new_status if latest else None)

    async def ensure_forward_move(
        self,
        order_number: str,
        target: OrderStatus,
        order_status: str | None = None,
    ) -> None:
        """
        Reject a staff move that is not strictly ahead of current progress.

        Raises:
            BadRequestException: If the move is backward, a no-op or off the flow
        """
        progress = await self.get_progress(order_number, order_status)
        if not can_move_to(target, progress):
            current = progress_status(progress)
            logger.warning(
                "illegal_status_transition",
                order_number=order_number,
                progress=current.value if current else None,
                target=target.value,
            )
            raise BadRequestException(
                f"Illegal status transition to '{target.value}' from "
                f"'{current.value if current else 'none'}'"
            )

    async def record_status_action(
        self,
        data: StatusActionCreate,
        staff_code: str,
    ) -> StatusActionResponse:
        """
        Record a staff status change after checking it moves forward.

        Successful records for one order therefore have strictly increasing
        positions in the status flow.
        """
        await self.ensure_forward_move(data.order_number, data.new_status)
        return await self.actions.record(
            order_number=data.order_number,
            prev_status=data.prev_status,
            new_status=data.new_status.value,
            staff_code=staff_code,
            order_id=data.order_id,
        )

    async def staff_move_status(
        self,
        order_number: str,
        target: OrderStatus,
        staff_code: str,
    ) -> OrderResponse:
        """
        Move an order forward on behalf of a staff member.

        Updates the order, appends to the action log and, on ``delivered``,
        completes the actor's assignment if the actor holds the order. All
        writes are committed together or not at all.
        """
        order = await self.orders.get_order(order_number)
        await self.ensure_forward_move(order_number, target, order.status)

        try:
            updated = await self.orders.set_status(order_number, target, commit=False)
            await self.actions.record(
                order_number=order_number,
                prev_status=order.status,
                new_status=target.value,
                staff_code=staff_code,
                order_id=str(order.id),
                commit=False,
            )

            if target is OrderStatus.DELIVERED:
                await self.assignments.complete_if_held(order_number, staff_code, commit=False)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return updated

    async def admin_set_status(self, order_number: str, status: OrderStatus) -> OrderResponse:
        """Set any status without a progress check (admin correction)."""
        order = await self.orders.set_status(order_number, status)
        logger.info("order_status_overridden", order_number=order_number, status=status.value)
        return order

    async def staff_board(self) -> list[StaffOrderView]:
        """
        Orders visible to staff, with progress, last actor and current holder.

        Orders whose latest payment proof is pending or rejected are hidden;
        orders without a proof (cash on delivery) are shown.
        """
        all_orders = await self.orders.list_orders()
        order_numbers = [order.order_number for order in all_orders]

        payment_status = await PaymentService(self.db).latest_status_by_order(order_numbers)
        latest_actions = await self.actions.latest_per_order(order_numbers)
        holders = await self.assignments.active_holders(order_numbers)

        board: list[StaffOrderView] = []
        for order in all_orders:
            paid = payment_status.get(order.order_number)
            if paid is not None and paid is not PaymentStatus.APPROVED:
                continue

            action = latest_actions.get(order.order_number)
            progress = effective_progress(order.status, action.new_status if action else None)
            board.append(
                StaffOrderView(
                    **order.model_dump(),
                    progress_status=progress_status(progress),
                    handled_by=action.staff_code if action else None,
                    assigned_to=holders.get(order.order_number),
                )
            )
        return board
