from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.db.models import Address


class AddressRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        customer_id: uuid.UUID,
        address_no: str,
        address_line1: str,
        city: str,
        zip_code: str,
        address_line2: str | None = None,
    ) -> Address:
        address = Address(
            customer_id=customer_id,
            address_no=address_no,
            address_line1=address_line1,
            address_line2=address_line2,
            city=city,
            zip_code=zip_code,
        )
        self._session.add(address)
        await self._session.flush()
        return address

    async def list_for_customer(self, customer_id: uuid.UUID) -> list[Address]:
        stmt = (
            select(Address)
            .where(Address.customer_id == customer_id)
            .order_by(Address.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())
