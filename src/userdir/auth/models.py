"""
userdir.auth.models

Auth domain models.

Responsibilities:
- Name the principal kinds and role tags the service understands.
- Define the token claims payload and the per-request authorized identity.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class PrincipalKind(enum.StrEnum):
    customer = "customer"
    admin = "admin"


class Role(enum.StrEnum):
    customer = "Customer"
    admin = "Admin"
    super_admin = "SuperAdmin"


ADMIN_ROLES: frozenset[str] = frozenset({Role.admin, Role.super_admin})


@dataclass(frozen=True, slots=True)
class SessionClaims:
    """
    Payload embedded in an issued bearer token. Never persisted.
    """

    principal_id: str
    principal_kind: PrincipalKind
    display_name: str
    email: str
    role: Role
    phone_number: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "principalId": self.principal_id,
            "principalKind": self.principal_kind.value,
            "displayName": self.display_name,
            "email": self.email,
            "role": self.role.value,
        }
        if self.phone_number is not None:
            payload["phoneNumber"] = self.phone_number
        return payload


@dataclass(frozen=True, slots=True)
class AuthorizedIdentity:
    """
    Caller identity already validated by the trusted edge.
    """

    principal_id: str
    role: str
    display_name: str | None = None
    email: str | None = None


# --- Module Notes -----------------------------------------------------------
# Role values are the wire strings the edge forwards ("Customer", "Admin",
# "SuperAdmin"); the gate compares them as plain strings.
