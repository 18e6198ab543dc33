"""Authentication schemas."""

from pydantic import BaseModel, Field, field_validator


class AdminLoginRequest(BaseModel):
    """Admin email/password login."""

    # Matched against the stored address, which may be any configured string
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are compared trimmed and lowercase."""
        v = v.strip().lower()
        if not v:
            raise ValueError("email must not be blank")
        return v


class StaffLoginRequest(BaseModel):
    """Staff username/password login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str
    token_type: str = "bearer"


class StaffLoginResponse(TokenResponse):
    """Staff login response with the identity carried by the token."""

    staff_code: str
    username: str
    name: str = ""
