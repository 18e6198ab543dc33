import os
from collections.abc import AsyncGenerator, Callable
from unittest.mock import MagicMock

# Settings are read at import time; point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./.pytest-app.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ADMIN_KEY"] = "test-admin-key"
os.environ["LOG_FORMAT"] = "console"

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Load any remaining variables from .env without overriding the above
load_dotenv()

from app.core.media import get_media_uploader
from app.core.security import create_admin_token, create_staff_token
from app.database import get_db
from app.dependencies import get_cache_manager
from app.main import app
from app.models import metadata
from app.schemas.orders import OrderCreate
from app.schemas.staff import StaffCreate
from app.services.order_service import OrderService
from app.services.staff_service import StaffService

ADMIN_KEY = "test-admin-key"


class FakeMediaUploader:
    """Media uploader double that records uploads and returns predictable URLs."""

    is_configured = True

    def __init__(self):
        self.uploads: list[dict] = []

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
        resource_type: str = "image",
    ) -> str:
        self.uploads.append(
            {
                "filename": filename,
                "content_type": content_type,
                "resource_type": resource_type,
                "size": len(content),
            }
        )
        return f"https://media.test/{resource_type}/{filename}"


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh SQLite database per test."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def media_uploader() -> FakeMediaUploader:
    """Recording media uploader."""
    return FakeMediaUploader()


@pytest.fixture
def cache_manager() -> MagicMock | None:
    """Cache manager used by the app; None disables caching."""
    return None


@pytest_asyncio.fixture
async def client(
    session_factory,
    media_uploader,
    cache_manager,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_uploader] = lambda: media_uploader
    app.dependency_overrides[get_cache_manager] = lambda: cache_manager

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Bearer token carrying the admin role."""
    token = create_admin_token("00000000-0000-0000-0000-000000000001", "admin@annadata.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_key_headers() -> dict[str, str]:
    """Static admin key header."""
    return {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def staff_headers() -> Callable[[str], dict[str, str]]:
    """Build bearer headers for a staff code."""

    def _headers(staff_code: str) -> dict[str, str]:
        token = create_staff_token(
            f"staff-{staff_code.lower()}",
            staff_code,
            staff_code.lower(),
            f"Staff {staff_code}",
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def staff_members(db_session) -> dict[str, dict]:
    """Three active staff accounts: A01, B02 and C03."""
    service = StaffService(db_session)
    members = {}
    for code, username in (("A01", "asha"), ("B02", "bala"), ("C03", "chitra")):
        created = await service.create_staff(
            StaffCreate(
                name=username.title(),
                username=username,
                password=f"{username}-password",
                staff_code=code,
            )
        )
        members[code] = {"id": created.id, "username": username, "password": f"{username}-password"}
    return members


@pytest.fixture
def make_order(db_session) -> Callable:
    """Factory creating orders straight through the order store."""

    async def _make_order(**overrides) -> str:
        data = {
            "customer_name": "Ravi Kumar",
            "customer_phone": "+91 98765 43210",
            "delivery_address": "12 Mill Road, Nashik",
            "items": "Desi cow ghee x2",
            "total_amount": 1200,
        }
        data.update(overrides)
        order = await OrderService(db_session).create_order(OrderCreate(**data))
        return order.order_number

    return _make_order
