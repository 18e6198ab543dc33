"""Assignment ledger: which staff member currently owns an order."""

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import ConflictException, NotFoundException
from app.models.staff_assignments import staff_assignments
from app.schemas.assignments import AssignmentResponse, AssignmentStatus

logger = get_logger(__name__)


class AssignmentService:
    """Service for claiming, listing and completing order assignments."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_active(self, order_number: str) -> AssignmentResponse | None:
        """Return the active assignment for an order, if any."""
        stmt = select(staff_assignments).where(
            and_(
                staff_assignments.c.order_number == order_number,
                staff_assignments.c.status == AssignmentStatus.ACTIVE.value,
            )
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return AssignmentResponse.model_validate(dict(row._mapping)) if row else None

    async def claim(
        self,
        order_number: str,
        staff_code: str,
        order_id: str | None = None,
    ) -> AssignmentResponse:
        """
        Claim an unassigned order for a staff member.

        First claim wins. Two claims racing past the pre-check are settled by
        the unique key on ``order_number``.

        Args:
            order_number: Order being claimed
            staff_code: Claiming staff member
            order_id: Optional order-store identifier

        Returns:
            Created active assignment

        Raises:
            ConflictException: If the order is already assigned
        """
        if await self.get_active(order_number):
            raise ConflictException("Order already assigned")

        stmt = (
            insert(staff_assignments)
            .values(
                order_number=order_number,
                order_id=order_id,
                staff_code=staff_code,
                status=AssignmentStatus.ACTIVE.value,
            )
            .returning(staff_assignments)
        )

        try:
            result = await self.db.execute(stmt)
            row = result.fetchone()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Order already assigned") from e

        logger.info("order_claimed", order_number=order_number, staff_code=staff_code)
        return AssignmentResponse.model_validate(dict(row._mapping))

    async def list_for_staff(
        self,
        staff_code: str,
        status: AssignmentStatus,
    ) -> list[AssignmentResponse]:
        """
        List a staff member's assignments with the given status, newest first.

        Active assignments are ordered by claim time, completed ones by
        completion time.
        """
        order_column = (
            staff_assignments.c.created_at
            if status is AssignmentStatus.ACTIVE
            else staff_assignments.c.updated_at
        )
        stmt = (
            select(staff_assignments)
            .where(
                and_(
                    staff_assignments.c.staff_code == staff_code,
                    staff_assignments.c.status == status.value,
                )
            )
            .order_by(order_column.desc())
        )
        result = await self.db.execute(stmt)
        return [AssignmentResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def list_active(self, staff_code: str) -> list[AssignmentResponse]:
        """List the caller's active assignments."""
        return await self.list_for_staff(staff_code, AssignmentStatus.ACTIVE)

    async def list_completed(self, staff_code: str) -> list[AssignmentResponse]:
        """List the caller's completed assignments."""
        return await self.list_for_staff(staff_code, AssignmentStatus.COMPLETED)

    async def complete(
        self,
        order_number: str,
        staff_code: str,
        commit: bool = True,
    ) -> AssignmentResponse:
        """
        Mark the caller's own active assignment completed.

        With ``commit=False`` the change is left for the caller to commit.

        Raises:
            NotFoundException: If the caller holds no active assignment for the order
        """
        stmt = (
            update(staff_assignments)
            .where(
                and_(
                    staff_assignments.c.order_number == order_number,
                    staff_assignments.c.staff_code == staff_code,
                    staff_assignments.c.status == AssignmentStatus.ACTIVE.value,
                )
            )
            .values(status=AssignmentStatus.COMPLETED.value)
            .returning(staff_assignments)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            await self.db.rollback()
            raise NotFoundException("Active assignment not found")

        if commit:
            await self.db.commit()
        logger.info("assignment_completed", order_number=order_number, staff_code=staff_code)
        return AssignmentResponse.model_validate(dict(row._mapping))

    async def complete_if_held(
        self,
        order_number: str,
        staff_code: str,
        commit: bool = True,
    ) -> AssignmentResponse | None:
        """Complete the assignment when ``staff_code`` holds it; otherwise do nothing."""
        active = await self.get_active(order_number)
        if active is None or active.staff_code != staff_code:
            return None
        return await self.complete(order_number, staff_code, commit=commit)

    async def reassign(self, order_number: str, from_staff: str, to_staff: str) -> bool:
        """
        Move an active assignment from one holder to another, in place.

        The update is conditional on ``from_staff`` still holding the order.

        Returns:
            True if the row was moved, False if the holder had changed
        """
        stmt = (
            update(staff_assignments)
            .where(
                and_(
                    staff_assignments.c.order_number == order_number,
                    staff_assignments.c.staff_code == from_staff,
                    staff_assignments.c.status == AssignmentStatus.ACTIVE.value,
                )
            )
            .values(staff_code=to_staff)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def active_holders(self, order_numbers: list[str]) -> dict[str, str]:
        """Map order number to the staff code of its active holder."""
        if not order_numbers:
            return {}
        stmt = select(staff_assignments.c.order_number, staff_assignments.c.staff_code).where(
            and_(
                staff_assignments.c.order_number.in_(order_numbers),
                staff_assignments.c.status == AssignmentStatus.ACTIVE.value,
            )
        )
        result = await self.db.execute(stmt)
        return {row.order_number: row.staff_code for row in result.fetchall()}
