"""Payment proof table using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Numeric, String, Table, Text, Uuid

from app.models.base import metadata, utcnow

payments = Table(
    "payments",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("order_number", String(64), nullable=False, index=True),
    Column("customer_name", String(200)),
    Column("customer_phone", String(20)),
    Column("amount", Numeric(10, 2)),
    Column("method", String(10), nullable=False, default="unknown"),
    Column("proof_url", Text, nullable=False),
    Column("status", String(10), nullable=False, default="pending"),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
    CheckConstraint("method IN ('qr', 'upi', 'card', 'unknown')", name="method"),
    CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="status"),
)
