"""Inbound form schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    """Contact form submission."""

    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    message: str | None = None


class ContactResponse(ContactCreate):
    """Stored contact submission."""

    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class CallbackCreate(BaseModel):
    """Callback request submission."""

    name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=20)
    message: str | None = None


class CallbackResponse(CallbackCreate):
    """Stored callback request."""

    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class EnquiryCreate(BaseModel):
    """Product enquiry submission."""

    product_name: str | None = Field(None, max_length=200)
    name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)
    message: str | None = None


class EnquiryResponse(EnquiryCreate):
    """Stored product enquiry."""

    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class ParticipantRole(str, Enum):
    """Lucky draw participant role."""

    FARMER = "farmer"
    SUBSCRIBER = "subscriber"


class ParticipantCreate(BaseModel):
    """Lucky draw participation submission."""

    name: str = Field(..., min_length=1, max_length=200)
    role: ParticipantRole
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    message: str | None = None


class ParticipantResponse(BaseModel):
    """Stored participation."""

    id: UUID
    name: str
    role: ParticipantRole
    email: str
    phone: str | None = None
    message: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SubscriberCreate(BaseModel):
    """Newsletter sign-up."""

    email: EmailStr
    source: str | None = Field(None, max_length=50)


class SubscriberResponse(BaseModel):
    """Newsletter subscriber with every source it signed up from."""

    id: UUID
    email: str
    sources: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
