"""
userdir.db.repositories.customers

Repository for `Customer` entities.

Responsibilities:
- Create and fetch customers (by id or by unique email).
- Apply profile and password-hash updates.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from userdir.db.models import Customer, utcnow


class CustomerRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        customer_name: str,
        email: str,
        phone_number: str,
        password_hash: str,
    ) -> Customer:
        customer = Customer(
            customer_name=customer_name,
            email=email,
            phone_number=phone_number,
            password=password_hash,
            addresses=[],
        )
        self._session.add(customer)
        await self._session.flush()
        return customer

    async def get(self, customer_id: uuid.UUID) -> Customer | None:
        stmt = (
            select(Customer)
            .where(Customer.customer_id == customer_id)
            .options(selectinload(Customer.addresses))
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> Customer | None:
        stmt = select(Customer).where(Customer.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[Customer]:
        stmt = (
            select(Customer)
            .options(selectinload(Customer.addresses))
            .order_by(Customer.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def update_profile(
        self,
        customer_id: uuid.UUID,
        *,
        customer_name: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> Customer | None:
        customer = await self.get(customer_id)
        if customer is None:
            return None
        if customer_name is not None:
            customer.customer_name = customer_name
        if email is not None:
            customer.email = email
        if phone_number is not None:
            customer.phone_number = phone_number
        customer.updated_at = utcnow()
        await self._session.flush()
        return customer

    async def set_password(self, customer_id: uuid.UUID, password_hash: str) -> None:
        customer = await self._session.get(Customer, customer_id, with_for_update=True)
        if customer is None:
            return
        customer.password = password_hash
        customer.updated_at = utcnow()
        await self._session.flush()
