"""Keyed content collections: catalog entries and inbound form submissions.

Each collection supports create, newest-first listing and delete. Public
catalog listings are cached in Redis and invalidated on every write.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Table, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from structlog import get_logger

from app.config import settings
from app.core.exceptions import NotFoundException
from app.core.redis_client import CacheManager
from app.models.catalog import (
    blogs,
    floating_texts,
    lucky_farmers,
    lucky_subscribers,
    plans,
    products,
    reviews,
)
from app.models.forms import callbacks, contacts, enquiries, participants
from app.schemas.catalog import (
    BlogResponse,
    FloatingTextResponse,
    LuckyEntryResponse,
    MediaType,
    PlanResponse,
    ProductResponse,
    ReviewResponse,
)
from app.schemas.forms import (
    CallbackResponse,
    ContactResponse,
    EnquiryResponse,
    ParticipantResponse,
)

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ContentStore(Generic[SchemaT]):
    """Create/list/delete over one table."""

    def __init__(
        self,
        table: Table,
        schema: type[SchemaT],
        cached: bool = False,
        order_by: list[ColumnElement] | None = None,
    ):
        """
        Initialize a collection over ``table``.

        Args:
            table: Backing table
            schema: Response model rows are validated into
            cached: Whether listings go through the Redis cache
            order_by: Listing order, newest first when omitted
        """
        self.table = table
        self.schema = schema
        self.cached = cached
        self.order_by = order_by or [table.c.created_at.desc()]

    @property
    def cache_key(self) -> str:
        """Cache key of the full listing."""
        return f"content:{self.table.name}:list"

    def _invalidate(self, cache: CacheManager | None) -> None:
        if self.cached and cache:
            cache.delete(self.cache_key)

    async def list_all(
        self,
        db: AsyncSession,
        cache: CacheManager | None = None,
    ) -> list[SchemaT]:
        """List every entry in listing order, from cache when possible."""
        if self.cached and cache:
            cached = cache.get_json(self.cache_key)
            if cached is not None:
                return [self.schema.model_validate(item) for item in cached]

        stmt = select(self.table).order_by(*self.order_by)
        result = await db.execute(stmt)
        items = [self.schema.model_validate(dict(row._mapping)) for row in result.fetchall()]

        if self.cached and cache:
            cache.set_json(
                self.cache_key,
                [item.model_dump(mode="json") for item in items],
                ttl=settings.catalog_cache_ttl,
            )
        return items

    async def latest(self, db: AsyncSession) -> SchemaT | None:
        """Most recently created entry, if any."""
        stmt = select(self.table).order_by(self.table.c.created_at.desc()).limit(1)
        result = await db.execute(stmt)
        row = result.fetchone()
        return self.schema.model_validate(dict(row._mapping)) if row else None

    async def create(
        self,
        db: AsyncSession,
        values: dict[str, Any],
        cache: CacheManager | None = None,
    ) -> SchemaT:
        """Insert an entry and return it."""
        stmt = insert(self.table).values(**values).returning(self.table)
        result = await db.execute(stmt)
        row = result.fetchone()
        await db.commit()

        self._invalidate(cache)
        logger.info("content_created", collection=self.table.name, id=str(row.id))
        return self.schema.model_validate(dict(row._mapping))

    async def delete(
        self,
        db: AsyncSession,
        item_id: UUID,
        cache: CacheManager | None = None,
    ) -> None:
        """
        Delete an entry.

        Raises:
            NotFoundException: If no entry has this id
        """
        stmt = delete(self.table).where(self.table.c.id == item_id)
        result = await db.execute(stmt)

        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundException(f"{self.schema.__name__.removesuffix('Response')} not found")

        await db.commit()
        self._invalidate(cache)
        logger.info("content_deleted", collection=self.table.name, id=str(item_id))


# Catalog
product_store = ContentStore(products, ProductResponse, cached=True)
blog_store = ContentStore(blogs, BlogResponse, cached=True)
review_store = ContentStore(reviews, ReviewResponse, cached=True)
plan_store = ContentStore(
    plans,
    PlanResponse,
    cached=True,
    order_by=[plans.c.display_order.asc(), plans.c.created_at.desc()],
)
floating_text_store = ContentStore(floating_texts, FloatingTextResponse)
lucky_farmer_store = ContentStore(lucky_farmers, LuckyEntryResponse, cached=True)
lucky_subscriber_store = ContentStore(lucky_subscribers, LuckyEntryResponse, cached=True)

# Inbound forms
contact_store = ContentStore(contacts, ContactResponse)
callback_store = ContentStore(callbacks, CallbackResponse)
enquiry_store = ContentStore(enquiries, EnquiryResponse)
participant_store = ContentStore(participants, ParticipantResponse)


def resolve_media_type(
    hint: MediaType | None,
    uploaded_content_type: str | None,
    media_url: str | None,
) -> MediaType:
    """
    Decide a blog post's media type.

    An uploaded file is a video when hinted so or when its MIME type is
    ``video/*``, otherwise an image. Without a file the hint wins, then a
    bare URL counts as an image.
    """
    if uploaded_content_type is not None:
        if hint is MediaType.VIDEO or uploaded_content_type.startswith("video/"):
            return MediaType.VIDEO
        return MediaType.IMAGE
    if hint is not None:
        return hint
    return MediaType.IMAGE if media_url else MediaType.NONE
