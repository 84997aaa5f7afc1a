"""
userdir.services.auth_service

Authentication and credential-recovery flows (transaction owner).

Responsibilities:
- Verify login credentials and issue signed bearer tokens.
- Issue and dispatch password-reset OTPs.
- Verify and consume OTPs.
- Reset password hashes.

Every public method runs under `service_operation`, so callers only ever see
`ServiceError` subclasses.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from userdir.auth.jwt import JwtConfig, issue_token
from userdir.auth.models import PrincipalKind, Role, SessionClaims
from userdir.auth.otp import OtpManager
from userdir.auth.passwords import ensure_hashable, hash_password, verify_password
from userdir.db.models import OneTimePasscode, OtpOwnerKind, utcnow
from userdir.db.repositories.admins import AdminRepo
from userdir.db.repositories.customers import CustomerRepo
from userdir.db.repositories.otps import OtpRepo
from userdir.errors import (
    InternalError,
    NotFoundError,
    UnauthorizedError,
    require_fields,
    service_operation,
)
from userdir.notifications.email import Notifier
from userdir.observability.logging import get_logger
from userdir.settings import Settings

log = get_logger(__name__)

USER_NOT_FOUND = "User not found"
INVALID_PASSWORD = "Invalid password"
OTP_SEND_FAILED = "Failed to send OTP"

_LOGIN_NOT_FOUND = {
    PrincipalKind.customer: "Customer not found",
    PrincipalKind.admin: "Admin not found",
}

_OWNER_KIND = {
    PrincipalKind.customer: OtpOwnerKind.customer,
    PrincipalKind.admin: OtpOwnerKind.admin,
}


@dataclass(frozen=True, slots=True)
class PrincipalRecord:
    """
    Kind-independent view of a customer or admin row.
    """

    kind: PrincipalKind
    principal_id: uuid.UUID
    display_name: str
    email: str
    password_hash: str
    role: Role
    phone_number: str | None = None

    def claims(self) -> SessionClaims:
        return SessionClaims(
            principal_id=str(self.principal_id),
            principal_kind=self.kind,
            display_name=self.display_name,
            email=self.email,
            role=self.role,
            phone_number=self.phone_number,
        )


class AuthService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        notifier: Notifier,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session = session
        self._settings = settings
        self._notifier = notifier

        self._customers = CustomerRepo(session)
        self._admins = AdminRepo(session)
        self._otps = OtpManager(
            repo=OtpRepo(session),
            ttl=timedelta(minutes=settings.otp_ttl_minutes),
            clock=clock,
        )

    @service_operation
    async def login(self, *, kind: PrincipalKind, email: str | None, password: str | None) -> str:
        require_fields(email=email, password=password)

        principal = await self._find(kind, email)
        if principal is None:
            log.info("login_failed", kind=kind.value, reason="not_found")
            raise NotFoundError(_LOGIN_NOT_FOUND[kind])

        if not await verify_password(password, principal.password_hash):
            log.info("login_failed", kind=kind.value, principal_id=str(principal.principal_id))
            raise UnauthorizedError(INVALID_PASSWORD)

        token = issue_token(cfg=JwtConfig.from_settings(self._settings), claims=principal.claims())
        log.info("login_succeeded", kind=kind.value, principal_id=str(principal.principal_id))
        return token

    @service_operation
    async def forgot_password(self, *, kind: PrincipalKind, email: str | None) -> None:
        require_fields(email=email)

        principal = await self._find(kind, email)
        if principal is None:
            raise NotFoundError(USER_NOT_FOUND)

        otp = await self._otps.issue(owner_kind=_OWNER_KIND[kind], owner_id=principal.principal_id)
        # Committed before dispatch: a failed send leaves the code in place.
        await self._session.commit()

        sent = await self._notifier.send(
            recipients=[principal.email],
            subject="Password reset code",
            message=(
                f"Your password reset code is {otp.otp_code}. "
                f"It expires in {self._settings.otp_ttl_minutes} minutes."
            ),
        )
        if not sent:
            log.warning(
                "otp_dispatch_failed", kind=kind.value, principal_id=str(principal.principal_id)
            )
            raise InternalError(OTP_SEND_FAILED)

    @service_operation
    async def verify_otp(
        self,
        *,
        kind: PrincipalKind,
        email: str | None,
        otp_code: str | None,
    ) -> OneTimePasscode:
        require_fields(email=email, otp_code=otp_code)

        principal = await self._find(kind, email)
        if principal is None:
            raise NotFoundError(USER_NOT_FOUND)

        otp = await self._otps.consume(
            owner_kind=_OWNER_KIND[kind],
            owner_id=principal.principal_id,
            code=otp_code,
        )
        await self._session.commit()
        log.info("otp_verified", kind=kind.value, principal_id=str(principal.principal_id))
        return otp

    @service_operation
    async def reset_password(
        self,
        *,
        kind: PrincipalKind,
        email: str | None,
        password: str | None,
    ) -> None:
        require_fields(email=email, password=password)
        ensure_hashable(password)

        principal = await self._find(kind, email)
        if principal is None:
            raise NotFoundError(USER_NOT_FOUND)

        new_hash = await hash_password(password, rounds=self._settings.bcrypt_rounds)
        if kind is PrincipalKind.customer:
            await self._customers.set_password(principal.principal_id, new_hash)
        else:
            await self._admins.set_password(principal.principal_id, new_hash)
        await self._session.commit()
        log.info("password_reset", kind=kind.value, principal_id=str(principal.principal_id))

    async def _find(self, kind: PrincipalKind, email: str) -> PrincipalRecord | None:
        if kind is PrincipalKind.customer:
            customer = await self._customers.get_by_email(email)
            if customer is None:
                return None
            return PrincipalRecord(
                kind=kind,
                principal_id=customer.customer_id,
                display_name=customer.customer_name,
                email=customer.email,
                password_hash=customer.password,
                role=Role.customer,
                phone_number=customer.phone_number,
            )

        admin = await self._admins.get_by_email(email)
        if admin is None:
            return None
        return PrincipalRecord(
            kind=kind,
            principal_id=admin.admin_id,
            display_name=admin.admin_name,
            email=admin.email,
            password_hash=admin.password,
            role=Role(admin.admin_role.value),
        )


# --- Module Notes -----------------------------------------------------------
# Reset does not demand a prior OTP verification; verify and reset are separate calls
# the client sequences. Binding them needs a reset ticket issued by verify_otp.
