"""
userdir.api.routers.customers

Customer and address record endpoints.

Responsibilities:
- Register, list, fetch and update customers.
- List and create a customer's addresses.

Customers may only touch their own record; admins and super-admins may touch any.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_201_CREATED

from userdir.api.deps import directory_service_dep
from userdir.api.envelope import Envelope, ok
from userdir.api.schemas import (
    AddressCreateRequest,
    AddressOut,
    CustomerCreateRequest,
    CustomerOut,
    CustomerUpdateRequest,
)
from userdir.auth.deps import NOT_AUTHORIZED, require_roles
from userdir.auth.models import ADMIN_ROLES, AuthorizedIdentity, Role
from userdir.errors import ForbiddenError
from userdir.services.directory_service import DirectoryService

router = APIRouter(prefix="/customers", tags=["customers"])

_any_principal = require_roles(Role.customer, Role.admin, Role.super_admin)


def _ensure_self_or_admin(identity: AuthorizedIdentity, customer_id: uuid.UUID) -> None:
    if identity.role in ADMIN_ROLES:
        return
    if identity.principal_id != str(customer_id):
        raise ForbiddenError(NOT_AUTHORIZED)


@router.post("", response_model=Envelope, status_code=HTTP_201_CREATED)
async def create_customer(
    body: CustomerCreateRequest,
    svc: DirectoryService = Depends(directory_service_dep),
) -> JSONResponse:
    customer = await svc.register_customer(
        customer_name=body.customer_name,
        email=body.email,
        password=body.password,
        phone_number=body.phone_number,
    )
    return ok(
        "Customer created successfully",
        CustomerOut.model_validate(customer),
        status_code=HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=Envelope,
    dependencies=[Depends(require_roles(Role.admin, Role.super_admin))],
)
async def list_customers(svc: DirectoryService = Depends(directory_service_dep)) -> JSONResponse:
    customers = await svc.list_customers()
    return ok(
        "Customers retrieved successfully",
        [CustomerOut.model_validate(c) for c in customers],
    )


@router.get("/{customer_id}", response_model=Envelope)
async def get_customer(
    customer_id: uuid.UUID,
    identity: AuthorizedIdentity = Depends(_any_principal),
    svc: DirectoryService = Depends(directory_service_dep),
) -> JSONResponse:
    _ensure_self_or_admin(identity, customer_id)
    customer = await svc.get_customer(customer_id)
    return ok("Customer retrieved successfully", CustomerOut.model_validate(customer))


@router.patch("/{customer_id}", response_model=Envelope)
async def update_customer(
    customer_id: uuid.UUID,
    body: CustomerUpdateRequest,
    identity: AuthorizedIdentity = Depends(_any_principal),
    svc: DirectoryService = Depends(directory_service_dep),
) -> JSONResponse:
    _ensure_self_or_admin(identity, customer_id)
    customer = await svc.update_customer(
        customer_id,
        customer_name=body.customer_name,
        email=body.email,
        phone_number=body.phone_number,
    )
    return ok("Customer updated successfully", CustomerOut.model_validate(customer))


@router.get("/{customer_id}/address", response_model=Envelope)
async def list_addresses(
    customer_id: uuid.UUID,
    identity: AuthorizedIdentity = Depends(_any_principal),
    svc: DirectoryService = Depends(directory_service_dep),
) -> JSONResponse:
    _ensure_self_or_admin(identity, customer_id)
    addresses = await svc.list_addresses(customer_id)
    return ok(
        "Addresses retrieved successfully",
        [AddressOut.model_validate(a) for a in addresses],
    )


@router.post("/{customer_id}/address", response_model=Envelope, status_code=HTTP_201_CREATED)
async def create_address(
    customer_id: uuid.UUID,
    body: AddressCreateRequest,
    identity: AuthorizedIdentity = Depends(_any_principal),
    svc: DirectoryService = Depends(directory_service_dep),
) -> JSONResponse:
    _ensure_self_or_admin(identity, customer_id)
    address = await svc.create_address(
        customer_id,
        address_no=body.address_no,
        address_line1=body.address_line1,
        address_line2=body.address_line2,
        city=body.city,
        zip_code=body.zip_code,
    )
    return ok(
        "Address created successfully",
        AddressOut.model_validate(address),
        status_code=HTTP_201_CREATED,
    )
