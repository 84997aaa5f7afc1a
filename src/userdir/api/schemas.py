"""
userdir.api.schemas

Request/response models for the HTTP surface.

Wire names are camelCase (`otpCode`, `customerName`, ...). Request fields are all
optional so that the services, not the transport, decide what "missing" means.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from userdir.auth.models import PrincipalKind
from userdir.db.models import AdminRole, OneTimePasscode


def _as_utc(value: datetime) -> datetime:
    # Rows store naive UTC; the wire always carries an explicit offset ("Z").
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -- requests -----------------------------------------------------------------


class LoginRequest(WireModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(WireModel):
    email: str | None = None


class VerifyOtpRequest(WireModel):
    email: str | None = None
    otp_code: str | None = None
    principal_kind: PrincipalKind = PrincipalKind.customer


class ResetPasswordRequest(WireModel):
    email: str | None = None
    password: str | None = None


class CustomerCreateRequest(WireModel):
    customer_name: str | None = None
    email: str | None = None
    password: str | None = None
    phone_number: str | None = None


class CustomerUpdateRequest(WireModel):
    customer_name: str | None = None
    email: str | None = None
    phone_number: str | None = None


class AddressCreateRequest(WireModel):
    address_no: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    zip_code: str | None = None


class AdminCreateRequest(WireModel):
    admin_name: str | None = None
    email: str | None = None
    password: str | None = None


class AdminUpdateRequest(WireModel):
    admin_name: str | None = None
    email: str | None = None


# -- responses ----------------------------------------------------------------


class AccessToken(WireModel):
    access_token: str


class OtpOut(WireModel):
    otp_id: uuid.UUID
    otp_code: str
    principal_kind: PrincipalKind
    principal_id: uuid.UUID
    expires_at: UtcDatetime

    @classmethod
    def from_row(cls, otp: OneTimePasscode) -> OtpOut:
        return cls(
            otp_id=otp.otp_id,
            otp_code=otp.otp_code,
            principal_kind=PrincipalKind(otp.owner_kind.value),
            principal_id=otp.owner_id,
            expires_at=otp.expires_at,
        )


class AddressOut(WireModel):
    address_id: uuid.UUID
    customer_id: uuid.UUID
    address_no: str
    address_line1: str
    address_line2: str | None = None
    city: str
    zip_code: str


class CustomerOut(WireModel):
    # Password hashes never leave the service.
    customer_id: uuid.UUID
    customer_name: str
    email: str
    phone_number: str
    addresses: list[AddressOut] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime


class AdminOut(WireModel):
    admin_id: uuid.UUID
    admin_name: str
    email: str
    admin_role: AdminRole
    created_at: UtcDatetime
    updated_at: UtcDatetime
