"""
userdir.db.repositories.otps

Repository for `OneTimePasscode` rows.

Responsibilities:
- Persist newly issued codes for a tagged owner.
- Find the most recent row for an owner + code, and consume it atomically.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.db.models import OneTimePasscode, OtpOwnerKind


class OtpRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        code: str,
        owner_kind: OtpOwnerKind,
        owner_id: uuid.UUID,
        expires_at: datetime,
    ) -> OneTimePasscode:
        otp = OneTimePasscode(
            otp_code=code,
            owner_kind=owner_kind,
            owner_id=owner_id,
            expires_at=expires_at,
        )
        self._session.add(otp)
        await self._session.flush()
        return otp

    async def delete_for_owner(self, *, owner_kind: OtpOwnerKind, owner_id: uuid.UUID) -> int:
        stmt = delete(OneTimePasscode).where(
            OneTimePasscode.owner_kind == owner_kind,
            OneTimePasscode.owner_id == owner_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def find_latest(
        self,
        *,
        owner_kind: OtpOwnerKind,
        owner_id: uuid.UUID,
        code: str,
    ) -> OneTimePasscode | None:
        stmt = (
            select(OneTimePasscode)
            .where(
                OneTimePasscode.owner_kind == owner_kind,
                OneTimePasscode.owner_id == owner_id,
                OneTimePasscode.otp_code == code,
            )
            .order_by(desc(OneTimePasscode.created_at))
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def consume(self, otp_id: uuid.UUID) -> bool:
        # Conditional delete: of two overlapping verifications only one removes the row.
        stmt = (
            delete(OneTimePasscode)
            .where(OneTimePasscode.otp_id == otp_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1


# --- Module Notes -----------------------------------------------------------
# Expired rows are left in place by verification; `delete_for_owner` runs whenever a
# new code is issued, so each owner holds at most one row outside concurrent issuance.
