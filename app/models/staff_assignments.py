"""Staff assignment (order ownership) model using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Index, String, Table, Uuid

from app.models.base import metadata, utcnow

staff_assignments = Table(
    "staff_assignments",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    # One row per order; transfers rewrite staff_code in place
    Column("order_number", String(64), nullable=False, unique=True),
    Column("order_id", String(64)),
    Column("staff_code", String(32), nullable=False),
    Column("status", String(20), nullable=False, default="active"),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
    CheckConstraint("status IN ('active', 'completed')", name="status"),
    Index("ix_staff_assignments_staff_status", "staff_code", "status"),
)
