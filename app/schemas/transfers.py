"""Transfer request schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TransferStatus(str, Enum):
    """Transfer request status enumeration."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TransferCreate(BaseModel):
    """Schema for proposing an ownership transfer."""

    order_number: str = Field(..., min_length=1, max_length=64)
    to_staff: str = Field(..., min_length=1, max_length=32)

    @field_validator("to_staff")
    @classmethod
    def normalize_staff_code(cls, v: str) -> str:
        """Staff codes compare uppercase."""
        return v.strip().upper()


class TransferResponse(BaseModel):
    """Schema for transfer request response."""

    id: UUID
    order_number: str
    from_staff: str
    to_staff: str
    status: TransferStatus
    decided_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransferDecisionResponse(BaseModel):
    """Result of accepting or rejecting a transfer."""

    success: bool = True
    transfer: TransferResponse
