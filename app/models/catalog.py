"""Catalog and site content tables using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
)

from app.models.base import metadata, utcnow


def _timestamps() -> list[Column]:
    return [
        Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
        Column(
            "updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
        ),
    ]


products = Table(
    "products",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200), nullable=False),
    Column("description", Text),
    Column("image_url", Text),
    Column("price", Numeric(10, 2)),
    Column("video_url", Text),
    Column("whatsapp_number", String(20)),
    *_timestamps(),
)

blogs = Table(
    "blogs",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("title", String(300), nullable=False),
    Column("content", Text),
    Column("media_type", String(10), nullable=False, default="none"),
    Column("media_url", Text),
    *_timestamps(),
    CheckConstraint("media_type IN ('none', 'image', 'video')", name="media_type"),
)

reviews = Table(
    "reviews",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200)),
    Column("image_url", Text),
    Column("text", Text, nullable=False),
    *_timestamps(),
)

plans = Table(
    "plans",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("title", String(200), nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("billing_period", String(20), nullable=False),
    Column("features", JSON, nullable=False, default=list),
    Column("description", Text),
    Column("image_url", Text),
    Column("popular", Boolean, nullable=False, default=False),
    # Position in the home page slider
    Column("display_order", Integer, nullable=False, default=0),
    *_timestamps(),
    CheckConstraint(
        "billing_period IN ('weekly', 'monthly', 'per_day', 'per_serve', 'per_year')",
        name="billing_period",
    ),
)

floating_texts = Table(
    "floating_texts",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("text", Text, nullable=False),
    *_timestamps(),
)


def _lucky_table(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", Uuid, primary_key=True, default=uuid4),
        Column("name", String(200), nullable=False),
        Column("image_url", Text),
        Column("content", Text),
        Column("phone", String(20)),
        *_timestamps(),
    )


lucky_farmers = _lucky_table("lucky_farmers")
lucky_subscribers = _lucky_table("lucky_subscribers")
