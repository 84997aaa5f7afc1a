"""
userdir.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create directory tables for local development and tests.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from userdir.db import models  # noqa: F401  # registers tables on Base.metadata
from userdir.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Prod relies on Alembic migrations instead.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
