"""
userdir.auth.deps

FastAPI dependency functions for request-time authorization (the role gate).

Responsibilities:
- Resolve the caller's `AuthorizedIdentity` attached by the trusted edge.
- Fall back to the legacy raw `user` header when the edge attached nothing.
- Enforce role membership via a reusable dependency factory.

Token signatures are never checked here; the edge has already done that.
"""

from __future__ import annotations

from fastapi import Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PayloadError

from userdir.api.deps import settings_dep
from userdir.auth.models import AuthorizedIdentity
from userdir.errors import ForbiddenError, ValidationError
from userdir.observability.logging import get_logger
from userdir.settings import Settings

log = get_logger(__name__)

INVALID_HEADER = "Invalid user header format"
NOT_AUTHORIZED = "Not authorized to access this route"


class ForwardedUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    user_role: str = Field(alias="userRole")
    user_name: str | None = Field(default=None, alias="userName")
    email: str | None = None


class ForwardedUserHeader(BaseModel):
    # Wire shape: {"user": {"userId": ..., "userRole": ..., "userName": ..., "email": ...}}
    user: ForwardedUser


def parse_identity_header(raw: str) -> AuthorizedIdentity:
    try:
        forwarded = ForwardedUserHeader.model_validate_json(raw).user
    except PayloadError as e:
        raise ValidationError(INVALID_HEADER) from e
    return AuthorizedIdentity(
        principal_id=forwarded.user_id,
        role=forwarded.user_role,
        display_name=forwarded.user_name,
        email=forwarded.email,
    )


def get_identity(
    request: Request,
    settings: Settings = Depends(settings_dep),
) -> AuthorizedIdentity | None:
    identity = getattr(request.state, "identity", None)
    if isinstance(identity, AuthorizedIdentity):
        return identity

    raw = request.headers.get(settings.identity_header)
    if not raw:
        return None

    identity = parse_identity_header(raw)
    request.state.identity = identity
    return identity


def require_roles(*allowed: str):
    allowed_set = frozenset(str(r) for r in allowed)

    def _dep(identity: AuthorizedIdentity | None = Depends(get_identity)) -> AuthorizedIdentity:
        if identity is None or identity.role not in allowed_set:
            log.info(
                "access_denied",
                role=identity.role if identity else None,
                allowed=sorted(allowed_set),
            )
            raise ForbiddenError(NOT_AUTHORIZED)
        return identity

    return _dep


# --- Module Notes -----------------------------------------------------------
# Routers declare the gate as `dependencies=[Depends(require_roles(...))]`; FastAPI
# caches `get_identity` per request, so handlers can also depend on it directly.
