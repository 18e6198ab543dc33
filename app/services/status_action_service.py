"""Status action log: append-only record of staff status changes."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.models.staff_order_actions import staff_order_actions
from app.schemas.staff_actions import StatusActionResponse

logger = get_logger(__name__)


class StatusActionService:
    """Service for appending to and reading back the status action log."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def record(
        self,
        order_number: str,
        prev_status: str | None,
        new_status: str,
        staff_code: str,
        order_id: str | None = None,
        commit: bool = True,
    ) -> StatusActionResponse:
        """
        Append a log entry. Entries are never updated or deleted.

        With ``commit=False`` the entry is left for the caller to commit.
        """
        stmt = (
            insert(staff_order_actions)
            .values(
                order_number=order_number,
                order_id=order_id,
                prev_status=prev_status,
                new_status=new_status,
                staff_code=staff_code,
            )
            .returning(staff_order_actions)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        if commit:
            await self.db.commit()

        logger.info(
            "status_action_recorded",
            order_number=order_number,
            prev_status=prev_status,
            new_status=new_status,
            staff_code=staff_code,
        )
        return StatusActionResponse.model_validate(dict(row._mapping))

    async def latest_per_order(self, order_numbers: list[str]) -> dict[str, StatusActionResponse]:
        """
        Latest log entry for each requested order.

        Entries are scanned newest first and the first one seen per order is
        kept, with ties on ``created_at`` going to the higher id. Orders without
        entries are absent from the result.
        """
        if not order_numbers:
            return {}

        stmt = (
            select(staff_order_actions)
            .where(staff_order_actions.c.order_number.in_(order_numbers))
            .order_by(staff_order_actions.c.created_at.desc(), staff_order_actions.c.id.desc())
        )
        result = await self.db.execute(stmt)

        latest: dict[str, StatusActionResponse] = {}
        for row in result.fetchall():
            if row.order_number not in latest:
                latest[row.order_number] = StatusActionResponse.model_validate(dict(row._mapping))
        return latest

    async def latest_for_order(self, order_number: str) -> StatusActionResponse | None:
        """Latest log entry for a single order."""
        stmt = (
            select(staff_order_actions)
            .where(staff_order_actions.c.order_number == order_number)
            .order_by(staff_order_actions.c.created_at.desc(), staff_order_actions.c.id.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return StatusActionResponse.model_validate(dict(row._mapping)) if row else None
