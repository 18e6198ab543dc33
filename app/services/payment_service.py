"""Payment proof capture and moderation."""

from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import NotFoundException
from app.models.payments import payments
from app.schemas.payments import PaymentCreate, PaymentResponse, PaymentStatus

logger = get_logger(__name__)


class PaymentService:
    """Service for customer-uploaded payment proofs."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def submit(self, data: PaymentCreate, proof_url: str) -> PaymentResponse:
        """Store a payment proof awaiting moderation."""
        stmt = (
            insert(payments)
            .values(
                order_number=data.order_number,
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                amount=data.amount,
                method=data.method.value,
                proof_url=proof_url,
                status=PaymentStatus.PENDING.value,
            )
            .returning(payments)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()

        logger.info("payment_proof_submitted", order_number=data.order_number, method=data.method.value)
        return PaymentResponse.model_validate(dict(row._mapping))

    async def list_payments(self) -> list[PaymentResponse]:
        """List payment proofs, newest first."""
        stmt = select(payments).order_by(payments.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [PaymentResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def set_status(self, payment_id: UUID, status: PaymentStatus) -> PaymentResponse:
        """
        Approve or reject a payment proof.

        Raises:
            NotFoundException: If the payment does not exist
        """
        stmt = (
            update(payments)
            .where(payments.c.id == payment_id)
            .values(status=status.value)
            .returning(payments)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            await self.db.rollback()
            raise NotFoundException("Payment not found")

        await self.db.commit()
        logger.info("payment_moderated", payment_id=str(payment_id), status=status.value)
        return PaymentResponse.model_validate(dict(row._mapping))

    async def delete_payment(self, payment_id: UUID) -> None:
        """
        Delete a payment proof record.

        Raises:
            NotFoundException: If the payment does not exist
        """
        result = await self.db.execute(delete(payments).where(payments.c.id == payment_id))
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundException("Payment not found")
        await self.db.commit()

    async def latest_status_by_order(self, order_numbers: list[str]) -> dict[str, PaymentStatus]:
        """Moderation status of the most recent proof for each order."""
        if not order_numbers:
            return {}

        stmt = (
            select(payments.c.order_number, payments.c.status)
            .where(payments.c.order_number.in_(order_numbers))
            .order_by(payments.c.created_at.desc())
        )
        result = await self.db.execute(stmt)

        latest: dict[str, PaymentStatus] = {}
        for row in result.fetchall():
            latest.setdefault(row.order_number, PaymentStatus(row.status))
        return latest
