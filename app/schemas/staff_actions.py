"""Staff status action schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.order_flow import OrderStatus


class StatusActionCreate(BaseModel):
    """Schema for recording a staff status change."""

    order_number: str = Field(..., min_length=1, max_length=64)
    order_id: str | None = Field(None, max_length=64)
    prev_status: str | None = Field(None, max_length=32)
    new_status: OrderStatus


class StatusActionResponse(BaseModel):
    """Schema for a status action log entry."""

    id: UUID
    order_number: str
    order_id: str | None = None
    prev_status: str | None = None
    new_status: str
    staff_code: str
    created_at: datetime

    model_config = {"from_attributes": True}
