"""Assignment transfer request model using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Index, String, Table, Uuid, text

from app.models.base import metadata, utcnow

transfer_requests = Table(
    "transfer_requests",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("order_number", String(64), nullable=False, index=True),
    Column("from_staff", String(32), nullable=False, index=True),
    Column("to_staff", String(32), nullable=False, index=True),
    Column("status", String(20), nullable=False, default="pending"),
    Column("decided_at", DateTime(timezone=True)),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
    CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="status"),
    # At most one pending request per order
    Index(
        "uq_transfer_requests_pending_order",
        "order_number",
        unique=True,
        postgresql_where=text("status = 'pending'"),
        sqlite_where=text("status = 'pending'"),
    ),
)
