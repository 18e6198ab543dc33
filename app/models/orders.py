"""Orders table model using SQLAlchemy Core.

The staff workflow only ever reads and writes ``status``; everything else on
the order belongs to checkout and the admin console.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Numeric, String, Table, Text, Uuid

from app.models.base import metadata, utcnow

orders = Table(
    "orders",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("order_number", String(64), nullable=False, unique=True, index=True),
    # Customer
    Column("customer_name", String(200), nullable=False),
    Column("customer_phone", String(20), nullable=False),
    Column("customer_email", String(255)),
    Column("delivery_address", Text),
    # Order details
    Column("items", Text),
    Column("total_amount", Numeric(10, 2)),
    Column("notes", Text),
    # Not constrained to the flow: legacy orders may carry "rejected"
    Column("status", String(32), nullable=False, default="pending", index=True),
    # Audit fields
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
)
