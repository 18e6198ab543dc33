"""Order schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.order_flow import OrderStatus


class OrderCreate(BaseModel):
    """Schema for placing an order."""

    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., min_length=7, max_length=20)
    customer_email: EmailStr | None = None
    delivery_address: str | None = Field(None, max_length=1000)
    items: str | None = Field(None, max_length=4000)
    total_amount: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=1000)

    @field_validator("customer_phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate phone number format."""
        cleaned = (
            v.replace("-", "").replace(" ", "").replace("(", "").replace(")", "").replace("+", "")
        )
        if not cleaned.isdigit():
            raise ValueError("Phone number must contain only digits and separators")
        if len(cleaned) < 7:
            raise ValueError("Phone number must have at least 7 digits")
        return v


class OrderResponse(BaseModel):
    """Schema for order response."""

    id: UUID
    order_number: str
    customer_name: str
    customer_phone: str
    customer_email: str | None = None
    delivery_address: str | None = None
    items: str | None = None
    total_amount: float | None = None
    notes: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderTrackingResponse(BaseModel):
    """Public view of an order's progress."""

    order_number: str
    status: str
    updated_at: datetime


class OrderStatusUpdate(BaseModel):
    """Schema for changing an order's status."""

    status: OrderStatus


class StaffOrderView(OrderResponse):
    """Order as shown on the staff board, with workflow context."""

    progress_status: OrderStatus | None = None
    handled_by: str | None = None
    assigned_to: str | None = None
