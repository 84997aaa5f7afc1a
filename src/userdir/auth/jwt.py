"""
userdir.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue short-lived bearer tokens that embed `SessionClaims`.
- Decode and validate tokens with strict claim requirements, for the edge verifier
  and for tests; request handlers in this service never call it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from userdir.auth.models import SessionClaims
from userdir.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str
    ttl: timedelta

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            ttl=timedelta(minutes=settings.jwt_ttl_minutes),
        )


class JwtValidationError(Exception):
    pass


def issue_token(*, cfg: JwtConfig, claims: SessionClaims) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        **claims.to_payload(),
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": claims.principal_id,
        "iat": int(now.timestamp()),
        "exp": int((now + cfg.ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# HS256 with a shared secret keeps the edge verifier simple; switching to RS256
# only changes `JwtConfig` and the key material.
