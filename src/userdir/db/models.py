"""
userdir.db.models

Persistence schema for the user directory.

Responsibilities:
- Define ORM models for the directory records and credential recovery:
  - Customer / Address: customer principals and their postal addresses
  - Admin: admin and super-admin principals (distinguished by `admin_role`)
  - OneTimePasscode: short-lived password-reset codes
"""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Enum, ForeignKey, Index, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from userdir.db.base import Base


def utcnow() -> datetime:
    # Naive UTC throughout; SQLite drops tzinfo on round-trip anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class AdminRole(enum.StrEnum):
    admin = "Admin"
    super_admin = "SuperAdmin"


class OtpOwnerKind(enum.StrEnum):
    customer = "customer"
    admin = "admin"


class Customer(Base):
    __tablename__ = "customers"

    customer_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    customer_name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    password: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)

    addresses: Mapped[list[Address]] = relationship(
        back_populates="customer", cascade="all, delete-orphan"
    )


class Address(Base):
    __tablename__ = "addresses"

    address_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("customers.customer_id"), nullable=False, index=True
    )
    address_no: Mapped[str] = mapped_column(String(64), nullable=False)
    address_line1: Mapped[str] = mapped_column(String(256), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(256), nullable=True)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(16), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    customer: Mapped[Customer] = relationship(back_populates="addresses")


class Admin(Base):
    __tablename__ = "admins"

    admin_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    admin_name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    admin_role: Mapped[AdminRole] = mapped_column(Enum(AdminRole), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)


class OneTimePasscode(Base):
    __tablename__ = "otps"

    otp_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    otp_code: Mapped[str] = mapped_column(String(8), nullable=False)
    # Tagged owner: customer and admin ids live in separate namespaces.
    owner_kind: Mapped[OtpOwnerKind] = mapped_column(Enum(OtpOwnerKind), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    __table_args__ = (Index("ix_otps_owner_code", "owner_kind", "owner_id", "otp_code"),)


# --- Module Notes -----------------------------------------------------------
# OTP rows are the only records with a lifecycle of their own; everything else the
# auth flows touch is a field update on an existing Customer/Admin row.
