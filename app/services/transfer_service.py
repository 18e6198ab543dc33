"""Transfer workflow: proposals to move an order between staff members."""

from uuid import UUID

from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from app.models.base import utcnow
from app.models.transfer_requests import transfer_requests
from app.schemas.transfers import TransferResponse, TransferStatus
from app.services.assignment_service import AssignmentService
from app.services.staff_service import StaffService

logger = get_logger(__name__)


class TransferService:
    """
    Service for the transfer request handshake.

    A request goes ``pending -> accepted | rejected`` and is never reopened.
    Only the current holder may propose, only the named target may decide.
    """

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.assignments = AssignmentService(db)

    async def propose(self, order_number: str, from_staff: str, to_staff: str) -> TransferResponse:
        """
        Propose handing an order over to another staff member.

        Args:
            order_number: Order to transfer
            from_staff: Caller, who must hold the active assignment
            to_staff: Target staff code

        Returns:
            Created pending transfer request

        Raises:
            BadRequestException: Self-transfer or unknown/inactive target
            ForbiddenException: Caller does not hold the assignment
            ConflictException: A pending request already exists for the order
        """
        if to_staff == from_staff:
            raise BadRequestException("Cannot transfer an order to yourself")

        assignment = await self.assignments.get_active(order_number)
        if assignment is None or assignment.staff_code != from_staff:
            raise ForbiddenException("You do not own this assignment")

        if await self._get_pending(order_number):
            raise ConflictException("Transfer already pending")

        if not await StaffService(self.db).get_active_by_code(to_staff):
            raise BadRequestException(f"Unknown staff code '{to_staff}'")

        stmt = (
            insert(transfer_requests)
            .values(
                order_number=order_number,
                from_staff=from_staff,
                to_staff=to_staff,
                status=TransferStatus.PENDING.value,
            )
            .returning(transfer_requests)
        )

        try:
            result = await self.db.execute(stmt)
            row = result.fetchone()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Transfer already pending") from e

        logger.info(
            "transfer_proposed",
            order_number=order_number,
            from_staff=from_staff,
            to_staff=to_staff,
        )
        return TransferResponse.model_validate(dict(row._mapping))

    async def list_mine(self, staff_code: str) -> list[TransferResponse]:
        """List requests the caller sent or received, newest first."""
        stmt = (
            select(transfer_requests)
            .where(
                or_(
                    transfer_requests.c.to_staff == staff_code,
                    transfer_requests.c.from_staff == staff_code,
                )
            )
            .order_by(transfer_requests.c.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [TransferResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def list_all(self) -> list[TransferResponse]:
        """List every transfer request, newest first."""
        stmt = select(transfer_requests).order_by(transfer_requests.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [TransferResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def accept(self, request_id: UUID, staff_code: str) -> TransferResponse:
        """
        Accept a pending transfer addressed to the caller.

        The ledger is re-checked at decision time. If the order has already
        been moved to the caller (a retried accept), that counts as success.

        Raises:
            NotFoundException: Unknown request
            BadRequestException: Request already decided
            ForbiddenException: Caller is not the target
            ConflictException: The proposer no longer holds the order
        """
        transfer = await self._get_decidable(request_id, staff_code)

        assignment = await self.assignments.get_active(transfer.order_number)
        holder = assignment.staff_code if assignment else None

        if holder == transfer.from_staff:
            moved = await self.assignments.reassign(
                transfer.order_number, transfer.from_staff, transfer.to_staff
            )
            if not moved:
                await self.db.rollback()
                raise ConflictException("Assignment no longer valid")
        elif holder != transfer.to_staff:
            raise ConflictException("Assignment no longer valid")

        decided = await self._decide(transfer.id, TransferStatus.ACCEPTED)
        logger.info(
            "transfer_accepted",
            transfer_id=str(transfer.id),
            order_number=transfer.order_number,
            from_staff=transfer.from_staff,
            to_staff=transfer.to_staff,
        )
        return decided

    async def reject(self, request_id: UUID, staff_code: str) -> TransferResponse:
        """
        Reject a pending transfer addressed to the caller.

        The assignment ledger is left untouched.
        """
        transfer = await self._get_decidable(request_id, staff_code)
        decided = await self._decide(transfer.id, TransferStatus.REJECTED)
        logger.info(
            "transfer_rejected",
            transfer_id=str(transfer.id),
            order_number=transfer.order_number,
            to_staff=transfer.to_staff,
        )
        return decided

    async def _get_pending(self, order_number: str) -> TransferResponse | None:
        stmt = select(transfer_requests).where(
            and_(
                transfer_requests.c.order_number == order_number,
                transfer_requests.c.status == TransferStatus.PENDING.value,
            )
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return TransferResponse.model_validate(dict(row._mapping)) if row else None

    async def _get_decidable(self, request_id: UUID, staff_code: str) -> TransferResponse:
        stmt = select(transfer_requests).where(transfer_requests.c.id == request_id)
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            raise NotFoundException("Transfer request not found")

        transfer = TransferResponse.model_validate(dict(row._mapping))
        if transfer.status is not TransferStatus.PENDING:
            raise BadRequestException("Already decided")
        if transfer.to_staff != staff_code:
            raise ForbiddenException("Not your transfer")
        return transfer

    async def _decide(self, request_id: UUID, status: TransferStatus) -> TransferResponse:
        stmt = (
            update(transfer_requests)
            .where(
                and_(
                    transfer_requests.c.id == request_id,
                    transfer_requests.c.status == TransferStatus.PENDING.value,
                )
            )
            .values(status=status.value, decided_at=utcnow())
            .returning(transfer_requests)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            await self.db.rollback()
            raise BadRequestException("Already decided")

        await self.db.commit()
        return TransferResponse.model_validate(dict(row._mapping))
