"""
userdir.auth.otp

One-time passcode lifecycle.

Responsibilities:
- Generate 4-digit numeric codes from a CSPRNG.
- Persist a code with its expiry for a tagged owner (customer or admin).
- Validate and consume a code exactly once.

The manager flushes but never commits; the calling service owns the transaction.
"""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

from userdir.db.models import OneTimePasscode, OtpOwnerKind, utcnow
from userdir.db.repositories.otps import OtpRepo
from userdir.errors import UnauthorizedError
from userdir.observability.logging import get_logger

log = get_logger(__name__)

OTP_MIN = 1000
OTP_MAX = 9999

INVALID_OTP = "Invalid OTP code"
EXPIRED_OTP = "OTP code has expired"


def generate_code() -> str:
    # Uniform over 1000..9999, so the code is always four digits.
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OtpManager:
    def __init__(
        self,
        *,
        repo: OtpRepo,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repo = repo
        self._ttl = ttl
        self._clock = clock

    async def issue(self, *, owner_kind: OtpOwnerKind, owner_id: uuid.UUID) -> OneTimePasscode:
        # A new code supersedes any earlier one for the same owner.
        superseded = await self._repo.delete_for_owner(owner_kind=owner_kind, owner_id=owner_id)
        otp = await self._repo.create(
            code=generate_code(),
            owner_kind=owner_kind,
            owner_id=owner_id,
            expires_at=self._clock() + self._ttl,
        )
        log.info(
            "otp_issued",
            owner_kind=owner_kind.value,
            owner_id=str(owner_id),
            superseded=superseded,
            expires_at=otp.expires_at.isoformat(),
        )
        return otp

    async def consume(
        self,
        *,
        owner_kind: OtpOwnerKind,
        owner_id: uuid.UUID,
        code: str,
    ) -> OneTimePasscode:
        otp = await self._repo.find_latest(owner_kind=owner_kind, owner_id=owner_id, code=code)
        if otp is None:
            raise UnauthorizedError(INVALID_OTP)
        if self._clock() > otp.expires_at:
            # Expired rows stay; only a successful verification deletes.
            raise UnauthorizedError(EXPIRED_OTP)
        if not await self._repo.consume(otp.otp_id):
            # A concurrent verification consumed it first.
            raise UnauthorizedError(INVALID_OTP)
        log.info("otp_consumed", owner_kind=owner_kind.value, owner_id=str(owner_id))
        return otp
