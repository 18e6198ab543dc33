"""Inbound form submission tables using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, String, Table, Text, Uuid

from app.models.base import metadata, utcnow

contacts = Table(
    "contacts",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200)),
    Column("email", String(255)),
    Column("phone", String(20)),
    Column("message", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)

callbacks = Table(
    "callbacks",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200)),
    Column("phone", String(20)),
    Column("message", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)

enquiries = Table(
    "enquiries",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("product_name", String(200)),
    Column("name", String(200)),
    Column("phone", String(20)),
    Column("email", String(255)),
    Column("message", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)

participants = Table(
    "participants",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200), nullable=False),
    Column("role", String(20), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(20)),
    Column("message", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    CheckConstraint("role IN ('farmer', 'subscriber')", name="role"),
)

newsletter_subscribers = Table(
    "newsletter_subscribers",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    # Stored lowercase and trimmed
    Column("email", String(255), nullable=False, unique=True, index=True),
    # Where the address was captured: footer, insights, lucky
    Column("sources", JSON, nullable=False, default=list),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
)
