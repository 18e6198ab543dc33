"""Staff directory endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import AdminOrStaffPrincipal, AdminPrincipal, DatabaseSession
from app.schemas.staff import StaffCreate, StaffDirectoryEntry, StaffResponse, StaffUpdate
from app.services.staff_service import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("", response_model=list[StaffResponse], summary="List staff accounts (admin)")
async def list_staff(db: DatabaseSession, admin: AdminPrincipal):
    """List every staff account, newest first."""
    return await StaffService(db).list_staff()


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a staff account (admin)",
)
async def create_staff(data: StaffCreate, db: DatabaseSession, admin: AdminPrincipal):
    """
    Create a staff account.

    Usernames are stored lowercase and staff codes uppercase; either one
    already in use yields 409.
    """
    return await StaffService(db).create_staff(data)


@router.get(
    "/list",
    response_model=list[StaffDirectoryEntry],
    summary="Active staff directory",
)
async def list_active_staff(db: DatabaseSession, principal: AdminOrStaffPrincipal):
    """Active staff, used to pick a transfer target."""
    return await StaffService(db).list_active()


@router.patch("/{staff_id}", response_model=StaffResponse, summary="Update a staff account (admin)")
async def update_staff(
    staff_id: UUID,
    data: StaffUpdate,
    db: DatabaseSession,
    admin: AdminPrincipal,
):
    """Change a staff member's name, password or active flag."""
    return await StaffService(db).update_staff(staff_id, data)


@router.delete(
    "/{staff_id}",
    response_model=StaffResponse,
    summary="Deactivate a staff account (admin)",
)
async def deactivate_staff(staff_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Deactivate a staff account. Its history stays attributable."""
    return await StaffService(db).deactivate_staff(staff_id)
