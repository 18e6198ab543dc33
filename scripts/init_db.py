"""Script to initialize the database and bootstrap the admin account.

Creates the tables straight from the model metadata; use
``scripts/migrate.py`` for migration-managed databases.
"""

import asyncio

from sqlalchemy import text

from app.database import AsyncSessionLocal, engine
from app.models import metadata
from app.services.auth_service import AuthService


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))

        await conn.run_sync(metadata.create_all)

    async with AsyncSessionLocal() as session:
        await AuthService(session).bootstrap_admin()

    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())
