"""Authentication endpoints."""

from fastapi import APIRouter, status

from app.dependencies import DatabaseSession
from app.schemas.auth import (
    AdminLoginRequest,
    StaffLoginRequest,
    StaffLoginResponse,
    TokenResponse,
)
from app.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/admin/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Admin email/password login",
)
async def admin_login(request: AdminLoginRequest, db: DatabaseSession) -> TokenResponse:
    """
    Exchange admin credentials for an access token.

    Args:
        request: Admin email and password
        db: Database session

    Returns:
        Bearer token carrying the admin role

    Raises:
        UnauthorizedException: If the credentials are wrong
    """
    return await AuthService(db).authenticate_admin(request.email, request.password)


@router.post(
    "/staff/login",
    response_model=StaffLoginResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Staff username/password login",
)
async def staff_login(request: StaffLoginRequest, db: DatabaseSession) -> StaffLoginResponse:
    """
    Exchange staff credentials for an access token.

    Only active staff accounts can log in. The token carries the staff code,
    username and name used by the order workflow endpoints.
    """
    return await AuthService(db).authenticate_staff(request.username, request.password)
