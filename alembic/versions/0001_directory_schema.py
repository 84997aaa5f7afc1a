"""directory schema: customers, addresses, admins, otps

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_admin_role = sa.Enum("admin", "super_admin", name="adminrole")
_otp_owner_kind = sa.Enum("customer", "admin", name="otpownerkind")


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("customer_id", sa.Uuid(), primary_key=True),
        sa.Column("customer_name", sa.String(256), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("password", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "addresses",
        sa.Column("address_id", sa.Uuid(), primary_key=True),
        sa.Column(
            "customer_id", sa.Uuid(), sa.ForeignKey("customers.customer_id"), nullable=False
        ),
        sa.Column("address_no", sa.String(64), nullable=False),
        sa.Column("address_line1", sa.String(256), nullable=False),
        sa.Column("address_line2", sa.String(256), nullable=True),
        sa.Column("city", sa.String(128), nullable=False),
        sa.Column("zip_code", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_addresses_customer_id", "addresses", ["customer_id"])
    op.create_table(
        "admins",
        sa.Column("admin_id", sa.Uuid(), primary_key=True),
        sa.Column("admin_name", sa.String(256), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password", sa.String(128), nullable=False),
        sa.Column("admin_role", _admin_role, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_admins_admin_role", "admins", ["admin_role"])
    op.create_table(
        "otps",
        sa.Column("otp_id", sa.Uuid(), primary_key=True),
        sa.Column("otp_code", sa.String(8), nullable=False),
        sa.Column("owner_kind", _otp_owner_kind, nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_otps_owner_code", "otps", ["owner_kind", "owner_id", "otp_code"])


def downgrade() -> None:
    op.drop_index("ix_otps_owner_code", table_name="otps")
    op.drop_table("otps")
    op.drop_index("ix_admins_admin_role", table_name="admins")
    op.drop_table("admins")
    op.drop_index("ix_addresses_customer_id", table_name="addresses")
    op.drop_table("addresses")
    op.drop_table("customers")
