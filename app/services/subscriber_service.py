"""Newsletter subscriptions."""

from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import NotFoundException
from app.models.forms import newsletter_subscribers
from app.schemas.forms import SubscriberCreate, SubscriberResponse

logger = get_logger(__name__)

DEFAULT_SOURCE = "footer"


class SubscriberService:
    """Service for newsletter sign-ups, keyed by lowercased email."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def _get_by_email(self, email: str) -> SubscriberResponse | None:
        stmt = select(newsletter_subscribers).where(newsletter_subscribers.c.email == email)
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return SubscriberResponse.model_validate(dict(row._mapping)) if row else None

    async def _add_source(self, subscriber: SubscriberResponse, source: str) -> SubscriberResponse:
        if source in subscriber.sources:
            return subscriber

        stmt = (
            update(newsletter_subscribers)
            .where(newsletter_subscribers.c.id == subscriber.id)
            .values(sources=[*subscriber.sources, source])
            .returning(newsletter_subscribers)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()
        return SubscriberResponse.model_validate(dict(row._mapping))

    async def subscribe(self, data: SubscriberCreate) -> tuple[SubscriberResponse, bool]:
        """
        Upsert a subscriber, adding the sign-up source to its source set.

        Returns:
            Tuple of (subscriber, created)
        """
        email = str(data.email).strip().lower()
        source = (data.source or DEFAULT_SOURCE).strip().lower()

        existing = await self._get_by_email(email)
        if existing:
            return await self._add_source(existing, source), False

        stmt = (
            insert(newsletter_subscribers)
            .values(email=email, sources=[source])
            .returning(newsletter_subscribers)
        )
        try:
            result = await self.db.execute(stmt)
            row = result.fetchone()
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same address
            await self.db.rollback()
            existing = await self._get_by_email(email)
            if existing is None:
                raise
            return await self._add_source(existing, source), False

        logger.info("newsletter_subscribed", source=source)
        return SubscriberResponse.model_validate(dict(row._mapping)), True

    async def list_subscribers(self) -> list[SubscriberResponse]:
        """List subscribers, newest first."""
        stmt = select(newsletter_subscribers).order_by(newsletter_subscribers.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [SubscriberResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def delete_subscriber(self, subscriber_id: UUID) -> None:
        """
        Remove a subscriber.

        Raises:
            NotFoundException: If the subscriber does not exist
        """
        stmt = delete(newsletter_subscribers).where(newsletter_subscribers.c.id == subscriber_id)
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundException("Subscriber not found")
        await self.db.commit()
