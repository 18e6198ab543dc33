"""Staff order status action log using SQLAlchemy Core.

Append-only: rows are inserted by staff status moves and never updated.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, String, Table, Uuid

from app.models.base import metadata, utcnow

staff_order_actions = Table(
    "staff_order_actions",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("order_id", String(64)),
    Column("order_number", String(64), nullable=False),
    Column("prev_status", String(32)),
    Column("new_status", String(32), nullable=False),
    Column("staff_code", String(32), nullable=False, index=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Index("ix_staff_order_actions_order_created", "order_number", "created_at"),
)
