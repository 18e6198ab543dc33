"""Staff assignment schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class AssignmentStatus(str, Enum):
    """Assignment status enumeration."""

    ACTIVE = "active"
    COMPLETED = "completed"


class ClaimOrderRequest(BaseModel):
    """Schema for claiming an unassigned order."""

    order_number: str = Field(..., min_length=1, max_length=64)
    order_id: str | None = Field(None, max_length=64)


class CompleteAssignmentRequest(BaseModel):
    """Schema for marking the caller's assignment completed."""

    order_number: str = Field(..., min_length=1, max_length=64)


class AssignmentResponse(BaseModel):
    """Schema for assignment response."""

    id: UUID
    order_number: str
    order_id: str | None = None
    staff_code: str
    status: AssignmentStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
