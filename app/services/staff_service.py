"""Staff directory service."""

from uuid import UUID

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import BadRequestException, ConflictException, NotFoundException
from app.core.security import get_password_hash
from app.models.staff import staff
from app.schemas.staff import StaffCreate, StaffDirectoryEntry, StaffResponse, StaffUpdate

logger = get_logger(__name__)


class StaffService:
    """Service for staff account management."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_staff(self) -> list[StaffResponse]:
        """List all staff accounts, newest first."""
        stmt = select(staff).order_by(staff.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [StaffResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def list_active(self) -> list[StaffDirectoryEntry]:
        """List active staff for transfer-target pickers."""
        stmt = select(staff).where(staff.c.active.is_(True)).order_by(staff.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [StaffDirectoryEntry.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def get_active_by_code(self, staff_code: str) -> StaffDirectoryEntry | None:
        """Look up an active staff member by staff code."""
        stmt = select(staff).where(
            and_(staff.c.staff_code == staff_code.upper(), staff.c.active.is_(True))
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return StaffDirectoryEntry.model_validate(dict(row._mapping)) if row else None

    async def get_active_by_username(self, username: str) -> dict | None:
        """Fetch an active staff row (including password hash) for login."""
        stmt = select(staff).where(
            and_(staff.c.username == username.strip().lower(), staff.c.active.is_(True))
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row else None

    async def create_staff(self, data: StaffCreate) -> StaffResponse:
        """
        Create a staff account.

        Raises:
            ConflictException: If the username or staff code is taken
        """
        stmt = (
            insert(staff)
            .values(
                name=data.name,
                username=data.username,
                password_hash=get_password_hash(data.password),
                staff_code=data.staff_code,
                active=data.active,
            )
            .returning(staff)
        )

        try:
            result = await self.db.execute(stmt)
            row = result.fetchone()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Username or staff code already exists") from e

        logger.info("staff_created", staff_code=data.staff_code, username=data.username)
        return StaffResponse.model_validate(dict(row._mapping))

    async def update_staff(self, staff_id: UUID, data: StaffUpdate) -> StaffResponse:
        """
        Update name, password or active flag.

        Raises:
            NotFoundException: If the staff account does not exist
        """
        values: dict = {}
        if data.name is not None:
            values["name"] = data.name
        if data.password is not None:
            values["password_hash"] = get_password_hash(data.password)
        if data.active is not None:
            values["active"] = data.active

        if not values:
            raise BadRequestException("No changes supplied")

        stmt = update(staff).where(staff.c.id == staff_id).values(**values).returning(staff)
        result = await self.db.execute(stmt)
        row = result.fetchone()

        if not row:
            await self.db.rollback()
            raise NotFoundException("Staff not found")

        await self.db.commit()
        logger.info("staff_updated", staff_id=str(staff_id), fields=sorted(values))
        return StaffResponse.model_validate(dict(row._mapping))

    async def deactivate_staff(self, staff_id: UUID) -> StaffResponse:
        """Deactivate a staff account; staff are never hard-deleted."""
        return await self.update_staff(staff_id, StaffUpdate(active=False))
