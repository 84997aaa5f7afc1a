"""
userdir.api.routers.admins

Admin and super-admin record endpoints.

Responsibilities:
- Mount `/admin` and `/super-admin` routers sharing one set of handlers,
  parameterized by the stored admin role and the roles allowed to call them.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_201_CREATED

from userdir.api.deps import directory_service_dep
from userdir.api.envelope import Envelope, ok
from userdir.api.schemas import AdminCreateRequest, AdminOut, AdminUpdateRequest
from userdir.auth.deps import require_roles
from userdir.auth.models import Role
from userdir.db.models import AdminRole
from userdir.services.directory_service import DirectoryService


def _build_router(
    *,
    prefix: str,
    role: AdminRole,
    label: str,
    plural: str,
    read_roles: tuple[Role, ...],
) -> APIRouter:
    # Only super-admins manage admin accounts; reads of a single admin are wider.
    manage = require_roles(Role.super_admin)
    read_one = require_roles(*read_roles)

    r = APIRouter(prefix=prefix, tags=["admins"])

    @r.get("", response_model=Envelope, dependencies=[Depends(manage)])
    async def list_admins(svc: DirectoryService = Depends(directory_service_dep)) -> JSONResponse:
        admins = await svc.list_admins(role)
        return ok(f"{plural} retrieved successfully", [AdminOut.model_validate(a) for a in admins])

    @r.get("/{admin_id}", response_model=Envelope, dependencies=[Depends(read_one)])
    async def get_admin(
        admin_id: uuid.UUID, svc: DirectoryService = Depends(directory_service_dep)
    ) -> JSONResponse:
        admin = await svc.get_admin(admin_id, role=role)
        return ok(f"{label} retrieved successfully", AdminOut.model_validate(admin))

    @r.post(
        "",
        response_model=Envelope,
        status_code=HTTP_201_CREATED,
        dependencies=[Depends(manage)],
    )
    async def create_admin(
        body: AdminCreateRequest, svc: DirectoryService = Depends(directory_service_dep)
    ) -> JSONResponse:
        admin = await svc.create_admin(
            role=role, admin_name=body.admin_name, email=body.email, password=body.password
        )
        return ok(
            f"{label} created successfully",
            AdminOut.model_validate(admin),
            status_code=HTTP_201_CREATED,
        )

    @r.patch("/{admin_id}", response_model=Envelope, dependencies=[Depends(manage)])
    async def update_admin(
        admin_id: uuid.UUID,
        body: AdminUpdateRequest,
        svc: DirectoryService = Depends(directory_service_dep),
    ) -> JSONResponse:
        admin = await svc.update_admin(
            admin_id, role=role, admin_name=body.admin_name, email=body.email
        )
        return ok(f"{label} updated successfully", AdminOut.model_validate(admin))

    return r


router = APIRouter()
router.include_router(
    _build_router(
        prefix="/admin",
        role=AdminRole.admin,
        label="Admin",
        plural="Admins",
        read_roles=(Role.admin, Role.super_admin),
    )
)
router.include_router(
    _build_router(
        prefix="/super-admin",
        role=AdminRole.super_admin,
        label="Super Admin",
        plural="Super Admins",
        read_roles=(Role.super_admin,),
    )
)
