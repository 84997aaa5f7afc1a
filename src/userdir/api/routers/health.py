"""
userdir.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/health`).
- Provide readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.api.deps import db_session

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "UP"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Readiness: the credential store must be reachable.
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Probes return bare bodies, not the envelope; load balancers read `status` directly.
