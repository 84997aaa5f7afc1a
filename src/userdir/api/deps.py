"""
userdir.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the notifier.
- Build request-scoped services from those resources.
- Encapsulate app.state access patterns (settings/sessionmaker/notifier).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from userdir.notifications.email import Notifier
from userdir.services.auth_service import AuthService
from userdir.services.directory_service import DirectoryService
from userdir.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are pinned on app.state by `create_app` so tests can inject their own.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is owned by the service layer.
    async with session_factory() as session:
        yield session


def notifier_dep(request: Request) -> Notifier:
    return request.app.state.notifier  # type: ignore[attr-defined]


def auth_service_dep(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    notifier: Notifier = Depends(notifier_dep),
) -> AuthService:
    return AuthService(session=session, settings=settings, notifier=notifier)


def directory_service_dep(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> DirectoryService:
    return DirectoryService(session=session, settings=settings)
