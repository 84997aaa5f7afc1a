"""
tests.conftest

Shared fixtures: a real app on a temp-file SQLite database, a recording notifier,
and helpers for seeding principals and forging edge identity headers.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from userdir.api.app import create_app
from userdir.api.deps import notifier_dep
from userdir.auth.passwords import hash_password
from userdir.db.models import Admin, AdminRole, Customer, OneTimePasscode, OtpOwnerKind
from userdir.db.repositories.admins import AdminRepo
from userdir.db.repositories.customers import CustomerRepo
from userdir.settings import Settings


@dataclass
class SentEmail:
    recipients: list[str]
    subject: str
    message: str


@dataclass
class RecordingNotifier:
    succeed: bool = True
    sent: list[SentEmail] = field(default_factory=list)

    async def send(self, *, recipients: list[str], subject: str, message: str) -> bool:
        self.sent.append(SentEmail(recipients=recipients, subject=subject, message=message))
        return self.succeed


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'userdir.db'}",
        bcrypt_rounds=4,
        jwt_secret="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture
async def app(settings: Settings, notifier: RecordingNotifier) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    app.dependency_overrides[notifier_dep] = lambda: notifier
    # httpx ASGITransport does not run lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def session_factory(app: FastAPI) -> async_sessionmaker[AsyncSession]:
    return app.state.sessionmaker


@pytest_asyncio.fixture
async def seed_customer(session_factory: async_sessionmaker[AsyncSession]):
    async def _seed(
        *,
        email: str = "john@example.com",
        password: str = "s3cret-pass",
        name: str = "John Doe",
        phone: str = "+15550100",
    ) -> Customer:
        async with session_factory() as session:
            customer = await CustomerRepo(session).create(
                customer_name=name,
                email=email,
                phone_number=phone,
                password_hash=await hash_password(password, rounds=4),
            )
            await session.commit()
            return customer

    return _seed


@pytest_asyncio.fixture
async def seed_admin(session_factory: async_sessionmaker[AsyncSession]):
    async def _seed(
        *,
        email: str = "admin@example.com",
        password: str = "admin-pass",
        name: str = "Ada Admin",
        role: AdminRole = AdminRole.admin,
    ) -> Admin:
        async with session_factory() as session:
            admin = await AdminRepo(session).create(
                admin_name=name,
                email=email,
                password_hash=await hash_password(password, rounds=4),
                role=role,
            )
            await session.commit()
            return admin

    return _seed


def identity_header(*, user_id: str, role: str, name: str = "Caller") -> dict[str, str]:
    return {
        "user": json.dumps(
            {"user": {"userId": user_id, "userRole": role, "userName": name, "email": "x@y.z"}}
        )
    }


@pytest.fixture
def as_identity():
    return identity_header


async def _fetch_otps(
    session: AsyncSession, *, owner_kind: OtpOwnerKind, owner_id: uuid.UUID
) -> list[OneTimePasscode]:
    stmt = select(OneTimePasscode).where(
        OneTimePasscode.owner_kind == owner_kind,
        OneTimePasscode.owner_id == owner_id,
    )
    return list((await session.execute(stmt)).scalars().all())


@pytest.fixture
def otp_rows(session_factory: async_sessionmaker[AsyncSession]):
    async def _rows(owner_kind: OtpOwnerKind, owner_id: uuid.UUID) -> list[OneTimePasscode]:
        async with session_factory() as session:
            return await _fetch_otps(session, owner_kind=owner_kind, owner_id=owner_id)

    return _rows
