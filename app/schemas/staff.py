"""Staff account schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class StaffCreate(BaseModel):
    """Schema for creating a staff account (admin only)."""

    name: str | None = Field(None, max_length=200)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=72)
    staff_code: str = Field(..., min_length=1, max_length=32)
    active: bool = True

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        """Usernames are stored lowercase and trimmed."""
        v = v.strip().lower()
        if not v:
            raise ValueError("username must not be blank")
        return v

    @field_validator("staff_code")
    @classmethod
    def normalize_staff_code(cls, v: str) -> str:
        """Staff codes are stored uppercase and trimmed."""
        v = v.strip().upper()
        if not v:
            raise ValueError("staff_code must not be blank")
        return v


class StaffUpdate(BaseModel):
    """Schema for updating a staff account."""

    name: str | None = Field(None, max_length=200)
    password: str | None = Field(None, min_length=1, max_length=72)
    active: bool | None = None


class StaffResponse(BaseModel):
    """Staff account as shown to admins."""

    id: UUID
    name: str | None = None
    username: str
    staff_code: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StaffDirectoryEntry(BaseModel):
    """Minimal staff entry used to pick a transfer target."""

    staff_code: str
    name: str | None = None
    username: str
    active: bool = True

    model_config = {"from_attributes": True}
