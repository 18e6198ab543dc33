"""Order store: order capture, lookup and the status field."""

import secrets
from datetime import UTC, datetime

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import ConflictException, NotFoundException
from app.core.order_flow import OrderStatus
from app.models.orders import orders
from app.schemas.orders import OrderCreate, OrderResponse

logger = get_logger(__name__)


def generate_order_number() -> str:
    """Human-readable order number, e.g. ``ORD-20260119-4F9A2C``."""
    return f"ORD-{datetime.now(UTC):%Y%m%d}-{secrets.token_hex(3).upper()}"


class OrderService:
    """Service for orders; the staff workflow touches only ``status``."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_order(self, data: OrderCreate) -> OrderResponse:
        """Place a new order in ``pending`` status."""
        stmt = (
            insert(orders)
            .values(
                order_number=generate_order_number(),
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                customer_email=data.customer_email,
                delivery_address=data.delivery_address,
                items=data.items,
                total_amount=data.total_amount,
                notes=data.notes,
                status=OrderStatus.PENDING.value,
            )
            .returning(orders)
        )

        try:
            result = await self.db.execute(stmt)
            row = result.fetchone()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Order number collision, please retry") from e

        logger.info("order_created", order_number=row.order_number)
        return OrderResponse.model_validate(dict(row._mapping))

    async def get_order(self, order_number: str) -> OrderResponse:
        """
        Get an order by order number.

        Raises:
            NotFoundException: If the order does not exist
        """
        stmt = select(orders).where(orders.c.order_number == order_number)
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            raise NotFoundException("Order not found")

        return OrderResponse.model_validate(dict(row._mapping))

    async def get_status(self, order_number: str) -> str | None:
        """Current status of an order, or None when the order is unknown."""
        stmt = select(orders.c.status).where(orders.c.order_number == order_number)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def set_status(
        self,
        order_number: str,
        status: OrderStatus,
        commit: bool = True,
    ) -> OrderResponse:
        """
        Overwrite an order's status.

        With ``commit=False`` the change is left for the caller to commit.

        Raises:
            NotFoundException: If the order does not exist
        """
        stmt = (
            update(orders)
            .where(orders.c.order_number == order_number)
            .values(status=status.value)
            .returning(orders)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            await self.db.rollback()
            raise NotFoundException("Order not found")

        if commit:
            await self.db.commit()
        return OrderResponse.model_validate(dict(row._mapping))

    async def list_orders(self, status: OrderStatus | None = None) -> list[OrderResponse]:
        """List orders newest first, optionally filtered by status."""
        stmt = select(orders).order_by(orders.c.created_at.desc())
        if status:
            stmt = stmt.where(orders.c.status == status.value)

        result = await self.db.execute(stmt)
        return [OrderResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]
