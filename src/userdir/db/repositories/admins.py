"""
userdir.db.repositories.admins

Repository for `Admin` entities (admins and super-admins share the table).
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.db.models import Admin, AdminRole, utcnow


class AdminRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        admin_name: str,
        email: str,
        password_hash: str,
        role: AdminRole,
    ) -> Admin:
        admin = Admin(
            admin_name=admin_name,
            email=email,
            password=password_hash,
            admin_role=role,
        )
        self._session.add(admin)
        await self._session.flush()
        return admin

    async def get(self, admin_id: uuid.UUID, *, role: AdminRole | None = None) -> Admin | None:
        admin = await self._session.get(Admin, admin_id)
        if admin is None or (role is not None and admin.admin_role != role):
            return None
        return admin

    async def get_by_email(self, email: str) -> Admin | None:
        stmt = select(Admin).where(Admin.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_by_role(self, role: AdminRole) -> list[Admin]:
        stmt = select(Admin).where(Admin.admin_role == role).order_by(Admin.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update_profile(
        self,
        admin_id: uuid.UUID,
        *,
        role: AdminRole,
        admin_name: str | None = None,
        email: str | None = None,
    ) -> Admin | None:
        admin = await self.get(admin_id, role=role)
        if admin is None:
            return None
        if admin_name is not None:
            admin.admin_name = admin_name
        if email is not None:
            admin.email = email
        admin.updated_at = utcnow()
        await self._session.flush()
        return admin

    async def set_password(self, admin_id: uuid.UUID, password_hash: str) -> None:
        admin = await self._session.get(Admin, admin_id, with_for_update=True)
        if admin is None:
            return
        admin.password = password_hash
        admin.updated_at = utcnow()
        await self._session.flush()
