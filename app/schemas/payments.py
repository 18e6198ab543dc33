"""Payment proof schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    """Payment method enumeration."""

    QR = "qr"
    UPI = "upi"
    CARD = "card"
    UNKNOWN = "unknown"


class PaymentStatus(str, Enum):
    """Payment proof moderation status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentCreate(BaseModel):
    """Payment proof submission (fields of the multipart form)."""

    order_number: str = Field(..., min_length=1, max_length=64)
    customer_name: str | None = Field(None, max_length=200)
    customer_phone: str | None = Field(None, max_length=20)
    amount: float | None = Field(None, ge=0)
    method: PaymentMethod = PaymentMethod.UNKNOWN


class PaymentResponse(BaseModel):
    """Stored payment proof."""

    id: UUID
    order_number: str
    customer_name: str | None = None
    customer_phone: str | None = None
    amount: float | None = None
    method: PaymentMethod
    proof_url: str
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
