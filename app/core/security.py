"""Security utilities for JWT, password handling and credential classification."""

import hmac
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from app.core.exceptions import UnauthorizedException

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Role(str, Enum):
    """Caller role resolved from request credentials."""

    ANONYMOUS = "anonymous"
    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class Principal:
    """Identity of the caller, as established by the authorization guard."""

    role: Role
    subject: str | None = None
    email: str | None = None
    staff_code: str | None = None
    username: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        """Whether the caller acts with admin capability."""
        return self.role is Role.ADMIN


ANONYMOUS = Principal(role=Role.ANONYMOUS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode (``sub``, ``role`` and role claims)
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update(
        {
            "exp": expire,
            "iat": datetime.now(UTC),
            "type": "access",
        }
    )

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_admin_token(admin_id: str, email: str) -> str:
    """Issue an access token carrying the admin role."""
    return create_access_token({"sub": admin_id, "role": Role.ADMIN.value, "email": email})


def create_staff_token(staff_id: str, staff_code: str, username: str, name: str | None) -> str:
    """Issue an access token carrying the staff role and staff identity."""
    return create_access_token(
        {
            "sub": staff_id,
            "role": Role.STAFF.value,
            "staff_code": staff_code,
            "username": username,
            "name": name or "",
        }
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token to decode

    Returns:
        Decoded payload or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )

        # Verify token type
        if payload.get("type") != "access":
            return None

        return payload
    except JWTError:
        return None


def admin_key_matches(admin_key: str | None) -> bool:
    """Check a static admin key against the configured one."""
    if not admin_key or not settings.admin_key:
        return False
    return hmac.compare_digest(admin_key, settings.admin_key)


def classify_credentials(bearer_token: str | None, admin_key: str | None = None) -> Principal:
    """
    Resolve request credentials into a typed principal.

    The static admin key wins when it matches. Otherwise the bearer token is
    verified; a token that fails verification is rejected outright rather
    than treated as anonymous.

    Args:
        bearer_token: Raw bearer token, if any
        admin_key: Value of the X-Admin-Key header, if any

    Returns:
        Principal with role admin, staff or anonymous

    Raises:
        UnauthorizedException: If a bearer token is present but invalid
    """
    if admin_key_matches(admin_key):
        return Principal(role=Role.ADMIN, subject="admin-key")

    if not bearer_token:
        return ANONYMOUS

    payload = decode_access_token(bearer_token)
    if payload is None:
        raise UnauthorizedException("Invalid token")

    role = payload.get("role")
    if role == Role.ADMIN.value:
        return Principal(role=Role.ADMIN, subject=payload.get("sub"), email=payload.get("email"))

    if role == Role.STAFF.value:
        staff_code = payload.get("staff_code")
        if not staff_code:
            raise UnauthorizedException("Invalid token")
        return Principal(
            role=Role.STAFF,
            subject=payload.get("sub"),
            staff_code=staff_code,
            username=payload.get("username"),
            name=payload.get("name") or None,
        )

    return ANONYMOUS
