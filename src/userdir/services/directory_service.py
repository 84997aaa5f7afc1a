"""
userdir.services.directory_service

Create/read/update flows for directory records (customers, addresses, admins,
super-admins).

Responsibilities:
- Validate required fields and hash passwords on creation.
- Translate unique-email violations into a validation failure.
- Commit each mutation as a single transaction.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.auth.passwords import ensure_hashable, hash_password
from userdir.db.models import Address, Admin, AdminRole, Customer
from userdir.db.repositories.addresses import AddressRepo
from userdir.db.repositories.admins import AdminRepo
from userdir.db.repositories.customers import CustomerRepo
from userdir.errors import NotFoundError, ValidationError, require_fields, service_operation
from userdir.observability.logging import get_logger
from userdir.settings import Settings

log = get_logger(__name__)

CUSTOMER_NOT_FOUND = "Customer not found"
EMAIL_TAKEN = "Email already registered"

ADMIN_NOT_FOUND = {
    AdminRole.admin: "Admin not found",
    AdminRole.super_admin: "Super Admin not found",
}


class DirectoryService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings

        self._customers = CustomerRepo(session)
        self._addresses = AddressRepo(session)
        self._admins = AdminRepo(session)

    # -- customers ---------------------------------------------------------

    @service_operation
    async def register_customer(
        self,
        *,
        customer_name: str | None,
        email: str | None,
        password: str | None,
        phone_number: str | None,
    ) -> Customer:
        require_fields(
            customer_name=customer_name, email=email, password=password, phone_number=phone_number
        )
        ensure_hashable(password)
        password_hash = await hash_password(password, rounds=self._settings.bcrypt_rounds)
        try:
            customer = await self._customers.create(
                customer_name=customer_name,
                email=email,
                phone_number=phone_number,
                password_hash=password_hash,
            )
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise ValidationError(EMAIL_TAKEN) from e
        log.info("customer_registered", customer_id=str(customer.customer_id))
        return customer

    @service_operation
    async def list_customers(self) -> list[Customer]:
        return await self._customers.list_all()

    @service_operation
    async def get_customer(self, customer_id: uuid.UUID) -> Customer:
        customer = await self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        return customer

    @service_operation
    async def update_customer(
        self,
        customer_id: uuid.UUID,
        *,
        customer_name: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> Customer:
        try:
            customer = await self._customers.update_profile(
                customer_id,
                customer_name=customer_name,
                email=email,
                phone_number=phone_number,
            )
            if customer is None:
                raise NotFoundError(CUSTOMER_NOT_FOUND)
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise ValidationError(EMAIL_TAKEN) from e
        return customer

    # -- addresses ---------------------------------------------------------

    @service_operation
    async def list_addresses(self, customer_id: uuid.UUID) -> list[Address]:
        if await self._customers.get(customer_id) is None:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        return await self._addresses.list_for_customer(customer_id)

    @service_operation
    async def create_address(
        self,
        customer_id: uuid.UUID,
        *,
        address_no: str | None,
        address_line1: str | None,
        city: str | None,
        zip_code: str | None,
        address_line2: str | None = None,
    ) -> Address:
        require_fields(
            address_no=address_no, address_line1=address_line1, city=city, zip_code=zip_code
        )
        if await self._customers.get(customer_id) is None:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        address = await self._addresses.create(
            customer_id=customer_id,
            address_no=address_no,
            address_line1=address_line1,
            address_line2=address_line2,
            city=city,
            zip_code=zip_code,
        )
        await self._session.commit()
        return address

    # -- admins / super-admins ---------------------------------------------

    @service_operation
    async def list_admins(self, role: AdminRole) -> list[Admin]:
        return await self._admins.list_by_role(role)

    @service_operation
    async def get_admin(self, admin_id: uuid.UUID, *, role: AdminRole) -> Admin:
        admin = await self._admins.get(admin_id, role=role)
        if admin is None:
            raise NotFoundError(ADMIN_NOT_FOUND[role])
        return admin

    @service_operation
    async def create_admin(
        self,
        *,
        role: AdminRole,
        admin_name: str | None,
        email: str | None,
        password: str | None,
    ) -> Admin:
        require_fields(admin_name=admin_name, email=email, password=password)
        ensure_hashable(password)
        password_hash = await hash_password(password, rounds=self._settings.bcrypt_rounds)
        try:
            admin = await self._admins.create(
                admin_name=admin_name, email=email, password_hash=password_hash, role=role
            )
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise ValidationError(EMAIL_TAKEN) from e
        log.info("admin_created", admin_id=str(admin.admin_id), role=role.value)
        return admin

    @service_operation
    async def update_admin(
        self,
        admin_id: uuid.UUID,
        *,
        role: AdminRole,
        admin_name: str | None = None,
        email: str | None = None,
    ) -> Admin:
        try:
            admin = await self._admins.update_profile(
                admin_id, role=role, admin_name=admin_name, email=email
            )
            if admin is None:
                raise NotFoundError(ADMIN_NOT_FOUND[role])
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise ValidationError(EMAIL_TAKEN) from e
        return admin
