"""Catalog and site content schemas."""

import json
from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class MediaType(str, Enum):
    """Blog media type enumeration."""

    NONE = "none"
    IMAGE = "image"
    VIDEO = "video"


class BillingPeriod(str, Enum):
    """Plan billing period enumeration."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    PER_DAY = "per_day"
    PER_SERVE = "per_serve"
    PER_YEAR = "per_year"


# ============================================================================
# Products
# ============================================================================


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    image_url: str | None = None
    price: float | None = Field(None, ge=0)
    video_url: str | None = None
    whatsapp_number: str | None = Field(None, max_length=20)


class ProductResponse(ProductCreate):
    """Schema for product response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ============================================================================
# Blogs
# ============================================================================


class BlogCreate(BaseModel):
    """Schema for creating a blog post."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str | None = None
    media_type: MediaType = MediaType.NONE
    media_url: str | None = None


class BlogResponse(BlogCreate):
    """Schema for blog response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ============================================================================
# Reviews
# ============================================================================


class ReviewCreate(BaseModel):
    """Schema for creating a customer review."""

    name: str | None = Field(None, max_length=200)
    text: str = Field(..., min_length=1)
    image_url: str | None = None


class ReviewResponse(ReviewCreate):
    """Schema for review response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ============================================================================
# Plans
# ============================================================================


def parse_features(raw: str | list[str] | None) -> list[str]:
    """Accept features as a list, a JSON array string or a comma-separated string."""
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(item).strip() for item in raw if str(item).strip()]
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = None
    if isinstance(decoded, list):
        return [str(item).strip() for item in decoded if str(item).strip()]
    return [part.strip() for part in raw.split(",") if part.strip()]


class PlanCreate(BaseModel):
    """Schema for creating a subscription plan."""

    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    billing_period: BillingPeriod
    features: list[str] = Field(default_factory=list)
    description: str | None = None
    image_url: str | None = None
    popular: bool = False
    display_order: int = 0

    @field_validator("features", mode="before")
    @classmethod
    def normalize_features(cls, v: str | list[str] | None) -> list[str]:
        """Normalize the accepted feature formats to a list."""
        return parse_features(v)


class PlanResponse(PlanCreate):
    """Schema for plan response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ============================================================================
# Floating text
# ============================================================================


class FloatingTextCreate(BaseModel):
    """Schema for the site-wide floating announcement."""

    text: str = Field(..., min_length=1)


class FloatingTextResponse(FloatingTextCreate):
    """Schema for floating text response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ============================================================================
# Lucky farmers / subscribers
# ============================================================================


class LuckyEntryCreate(BaseModel):
    """Schema for a lucky draw winner entry."""

    name: str = Field(..., min_length=1, max_length=200)
    content: str | None = None
    phone: str | None = Field(None, max_length=20)
    image_url: str | None = None


class LuckyEntryResponse(LuckyEntryCreate):
    """Schema for lucky draw winner response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UploadResponse(BaseModel):
    """URL of a file relayed to the media host."""

    url: str
