"""Tests for admin and staff login and the admin bootstrap."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.config import settings
from app.core.security import Role, classify_credentials
from app.models.admins import admins
from app.services.auth_service import AuthService


@pytest.mark.asyncio
async def test_bootstrap_creates_default_admin(db_session, monkeypatch) -> None:
    """Without configured credentials the default admin is created once."""
    monkeypatch.setattr(settings, "admin_email", None)
    monkeypatch.setattr(settings, "admin_password", None)

    service = AuthService(db_session)
    await service.bootstrap_admin()
    await service.bootstrap_admin()

    result = await db_session.execute(select(admins.c.email))
    assert result.scalars().all() == [settings.default_admin_email.lower()]


@pytest.mark.asyncio
async def test_bootstrap_syncs_configured_admin(
    client: AsyncClient, db_session, monkeypatch
) -> None:
    """Configured credentials create the admin, then reset its password."""
    monkeypatch.setattr(settings, "admin_email", "Owner@Farm.test")
    monkeypatch.setattr(settings, "admin_password", "first-password")
    await AuthService(db_session).bootstrap_admin()

    monkeypatch.setattr(settings, "admin_password", "second-password")
    await AuthService(db_session).bootstrap_admin()

    old = await client.post(
        "/api/v1/auth/admin/login",
        json={"email": "owner@farm.test", "password": "first-password"},
    )
    assert old.status_code == 401

    response = await client.post(
        "/api/v1/auth/admin/login",
        json={"email": "owner@farm.test", "password": "second-password"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert classify_credentials(data["access_token"]).role is Role.ADMIN


@pytest.mark.asyncio
async def test_admin_login_wrong_password(client: AsyncClient, db_session, monkeypatch) -> None:
    """Wrong credentials are rejected with the error envelope."""
    monkeypatch.setattr(settings, "admin_email", "owner@farm.test")
    monkeypatch.setattr(settings, "admin_password", "right-password")
    await AuthService(db_session).bootstrap_admin()

    response = await client.post(
        "/api/v1/auth/admin/login",
        json={"email": "owner@farm.test", "password": "wrong-password"},
    )
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "UnauthorizedException"
    assert body["message"] == "Invalid credentials"
    assert body["path"].endswith("/api/v1/auth/admin/login")


@pytest.mark.asyncio
async def test_admin_login_unknown_email(client: AsyncClient) -> None:
    """Unknown admins cannot log in."""
    response = await client.post(
        "/api/v1/auth/admin/login",
        json={"email": "nobody@farm.test", "password": "whatever"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_staff_login(client: AsyncClient, staff_members) -> None:
    """Staff log in by username and receive a token carrying their code."""
    response = await client.post(
        "/api/v1/auth/staff/login",
        json={"username": "  Asha ", "password": "asha-password"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["staff_code"] == "A01"
    assert data["username"] == "asha"
    assert data["name"] == "Asha"

    principal = classify_credentials(data["access_token"])
    assert principal.role is Role.STAFF
    assert principal.staff_code == "A01"


@pytest.mark.asyncio
async def test_staff_login_wrong_password(client: AsyncClient, staff_members) -> None:
    """A wrong password is rejected."""
    response = await client.post(
        "/api/v1/auth/staff/login",
        json={"username": "asha", "password": "bala-password"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_inactive_staff_cannot_login(
    client: AsyncClient, staff_members, admin_headers
) -> None:
    """Deactivated accounts lose login access."""
    await client.delete(f"/api/v1/staff/{staff_members['B02']['id']}", headers=admin_headers)

    response = await client.post(
        "/api/v1/auth/staff/login",
        json={"username": "bala", "password": "bala-password"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_validation(client: AsyncClient) -> None:
    """Missing fields fail validation with details."""
    response = await client.post("/api/v1/auth/staff/login", json={"username": "asha"})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "ValidationError"
    assert body["details"]


@pytest.mark.asyncio
async def test_admin_login_with_local_address(
    client: AsyncClient, db_session, monkeypatch
) -> None:
    """Any configured admin address can log in, including hosts without a TLD."""
    monkeypatch.setattr(settings, "admin_email", "Admin@Localhost")
    monkeypatch.setattr(settings, "admin_password", "local-password")
    await AuthService(db_session).bootstrap_admin()

    response = await client.post(
        "/api/v1/auth/admin/login",
        json={"email": " admin@localhost ", "password": "local-password"},
    )
    assert response.status_code == 200
    assert classify_credentials(response.json()["access_token"]).role is Role.ADMIN


@pytest.mark.asyncio
async def test_admin_login_blank_email(client: AsyncClient) -> None:
    """A blank email fails validation."""
    response = await client.post(
        "/api/v1/auth/admin/login", json={"email": "   ", "password": "whatever"}
    )
    assert response.status_code == 422
