"""Staff account model definition using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, Table, Text, Uuid

from app.models.base import metadata, utcnow

staff = Table(
    "staff",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("name", String(200)),
    # Stored lowercase
    Column("username", String(100), nullable=False, unique=True, index=True),
    Column("password_hash", Text, nullable=False),
    # Stored uppercase; the key used by assignments, transfers and actions
    Column("staff_code", String(32), nullable=False, unique=True, index=True),
    # Staff are deactivated, never hard-deleted
    Column("active", Boolean, nullable=False, default=True, index=True),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
)
