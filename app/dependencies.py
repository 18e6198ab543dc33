"""FastAPI dependencies: database session, cache and the authorization guard."""

from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import UnauthorizedException
from app.core.media import MediaUploader, get_media_uploader
from app.core.redis_client import CacheManager, get_redis_client
from app.core.security import Principal, Role, classify_credentials
from app.database import get_db

logger = get_logger(__name__)

# Bearer credentials are optional: the admin key header is an alternative
security = HTTPBearer(auto_error=False)


def get_cache_manager() -> CacheManager | None:
    """
    Cache manager over the shared Redis client.

    Returns:
        CacheManager; reads miss and writes no-op while Redis is unreachable
    """
    return CacheManager(get_redis_client())


async def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_admin_key: Annotated[str | None, Header()] = None,
) -> Principal:
    """
    Resolve the caller from the Authorization and X-Admin-Key headers.

    Args:
        credentials: Bearer token credentials, if sent
        x_admin_key: Static admin key, if sent

    Returns:
        Principal for the caller (possibly anonymous)

    Raises:
        UnauthorizedException: If a bearer token is sent but invalid
    """
    token = credentials.credentials if credentials else None
    return classify_credentials(token, x_admin_key)


def _require(*roles: Role):
    """Build a guard admitting only callers with one of ``roles``."""

    async def guard(principal: Annotated[Principal, Depends(get_principal)]) -> Principal:
        if principal.role not in roles:
            logger.warning(
                "authorization_denied",
                role=principal.role.value,
                required=[role.value for role in roles],
            )
            raise UnauthorizedException("Unauthorized")
        return principal

    return guard


require_admin = _require(Role.ADMIN)
require_staff = _require(Role.STAFF)
require_admin_or_staff = _require(Role.ADMIN, Role.STAFF)


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]
MediaUploaderDep = Annotated[MediaUploader, Depends(get_media_uploader)]
CurrentPrincipal = Annotated[Principal, Depends(get_principal)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
StaffPrincipal = Annotated[Principal, Depends(require_staff)]
AdminOrStaffPrincipal = Annotated[Principal, Depends(require_admin_or_staff)]
