"""
tests.test_passwords

bcrypt helpers, including the 72-byte input limit.
"""

from __future__ import annotations

import pytest

from userdir.auth.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password
from userdir.errors import ValidationError


@pytest.mark.asyncio
async def test_hash_and_verify() -> None:
    hashed = await hash_password("correct horse", rounds=4)

    assert hashed != "correct horse"
    assert await verify_password("correct horse", hashed)
    assert not await verify_password("battery staple", hashed)


@pytest.mark.asyncio
async def test_limit_is_measured_in_bytes() -> None:
    at_limit = "a" * MAX_PASSWORD_BYTES
    hashed = await hash_password(at_limit, rounds=4)
    assert await verify_password(at_limit, hashed)

    with pytest.raises(ValidationError):
        await hash_password("ß" * 37, rounds=4)  # 74 bytes


@pytest.mark.asyncio
async def test_overlong_candidate_never_verifies() -> None:
    hashed = await hash_password("a" * MAX_PASSWORD_BYTES, rounds=4)

    assert not await verify_password("a" * (MAX_PASSWORD_BYTES + 8), hashed)
