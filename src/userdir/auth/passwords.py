"""
userdir.auth.passwords

One-way salted password hashing (bcrypt).

Hashing is CPU-bound, so both helpers hop to a worker thread to keep the event loop
responsive under concurrent logins.
"""

from __future__ import annotations

import asyncio

import bcrypt

from userdir.errors import ValidationError

# bcrypt only ever reads this many bytes of input; newer releases refuse more.
MAX_PASSWORD_BYTES = 72

PASSWORD_TOO_LONG = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"


def ensure_hashable(password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(PASSWORD_TOO_LONG)


async def hash_password(password: str, *, rounds: int = 10) -> str:
    ensure_hashable(password)

    def _hash() -> str:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    return await asyncio.to_thread(_hash)


async def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        # No stored hash was made from input this long.
        return False
    # checkpw compares in constant time.
    return await asyncio.to_thread(bcrypt.checkpw, encoded, password_hash.encode("utf-8"))
