"""Authentication service for admin and staff logins."""

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.core.security import (
    create_admin_token,
    create_staff_token,
    get_password_hash,
    verify_password,
)
from app.models.admins import admins
from app.schemas.auth import StaffLoginResponse, TokenResponse
from app.services.staff_service import StaffService

logger = get_logger(__name__)


class AuthService:
    """Authentication service issuing role-carrying JWTs."""

    def __init__(self, db: AsyncSession):
        """Initialize auth service with database session."""
        self.db = db

    async def authenticate_admin(self, email: str, password: str) -> TokenResponse:
        """
        Verify admin credentials and issue an admin token.

        Args:
            email: Admin email
            password: Plain password

        Returns:
            Access token carrying the admin role

        Raises:
            UnauthorizedException: If the credentials do not match
        """
        stmt = select(admins).where(admins.c.email == email.strip().lower())
        result = await self.db.execute(stmt)
        admin = result.mappings().first()

        if not admin or not verify_password(password, admin["password_hash"]):
            logger.warning("admin_login_failed", email=email)
            raise UnauthorizedException("Invalid credentials")

        logger.info("admin_logged_in", admin_id=str(admin["id"]))
        return TokenResponse(access_token=create_admin_token(str(admin["id"]), admin["email"]))

    async def authenticate_staff(self, username: str, password: str) -> StaffLoginResponse:
        """
        Verify staff credentials and issue a staff token.

        Inactive staff cannot log in.

        Raises:
            UnauthorizedException: If the credentials do not match an active account
        """
        member = await StaffService(self.db).get_active_by_username(username)

        if not member or not verify_password(password, member["password_hash"]):
            logger.warning("staff_login_failed", username=username)
            raise UnauthorizedException("Invalid credentials")

        token = create_staff_token(
            str(member["id"]),
            member["staff_code"],
            member["username"],
            member["name"],
        )
        logger.info("staff_logged_in", staff_code=member["staff_code"])
        return StaffLoginResponse(
            access_token=token,
            staff_code=member["staff_code"],
            username=member["username"],
            name=member["name"] or "",
        )

    async def bootstrap_admin(self) -> None:
        """
        Make sure an admin account exists at startup.

        With ADMIN_EMAIL and ADMIN_PASSWORD set, that account is created or
        its password reset. Otherwise the default admin is created only when
        no admin exists yet.
        """
        if settings.admin_email and settings.admin_password:
            email = settings.admin_email.strip().lower()
            password_hash = get_password_hash(settings.admin_password)

            result = await self.db.execute(select(admins.c.id).where(admins.c.email == email))
            if result.scalar_one_or_none():
                await self.db.execute(
                    update(admins).where(admins.c.email == email).values(password_hash=password_hash)
                )
                logger.info("admin_password_synced", email=email)
            else:
                await self.db.execute(insert(admins).values(email=email, password_hash=password_hash))
                logger.info("admin_created", email=email)
            await self.db.commit()
            return

        result = await self.db.execute(select(admins.c.id).limit(1))
        if result.scalar_one_or_none():
            return

        await self.db.execute(
            insert(admins).values(
                email=settings.default_admin_email.lower(),
                password_hash=get_password_hash(settings.default_admin_password),
            )
        )
        await self.db.commit()
        logger.warning("default_admin_created", email=settings.default_admin_email)
