"""
userdir.api.routers.auth

Public authentication and credential-recovery endpoints.

Responsibilities:
- Customer/admin login (bearer token issuance).
- Forgot-password (OTP dispatch), OTP verification, password reset.
- Customer self-registration.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_201_CREATED

from userdir.api.deps import auth_service_dep, directory_service_dep
from userdir.api.envelope import Envelope, ok
from userdir.api.schemas import (
    AccessToken,
    CustomerCreateRequest,
    CustomerOut,
    ForgotPasswordRequest,
    LoginRequest,
    OtpOut,
    ResetPasswordRequest,
    VerifyOtpRequest,
)
from userdir.auth.models import PrincipalKind
from userdir.services.auth_service import AuthService
from userdir.services.directory_service import DirectoryService

router = APIRouter(prefix="/auth", tags=["auth"])

_LOGGED_IN = {
    PrincipalKind.customer: "Customer logged in successfully",
    PrincipalKind.admin: "Admin logged in successfully",
}


async def _login(svc: AuthService, kind: PrincipalKind, body: LoginRequest) -> JSONResponse:
    token = await svc.login(kind=kind, email=body.email, password=body.password)
    return ok(_LOGGED_IN[kind], AccessToken(access_token=token))


async def _forgot(svc: AuthService, kind: PrincipalKind, body: ForgotPasswordRequest) -> JSONResponse:
    await svc.forgot_password(kind=kind, email=body.email)
    return ok("OTP sent successfully")


async def _reset(svc: AuthService, kind: PrincipalKind, body: ResetPasswordRequest) -> JSONResponse:
    await svc.reset_password(kind=kind, email=body.email, password=body.password)
    return ok("Password changed successfully")


@router.post("/customers/register", response_model=Envelope, status_code=HTTP_201_CREATED)
async def register_customer(
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


@router.post("/customers/login", response_model=Envelope)
async def customer_login(
    body: LoginRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _login(svc, PrincipalKind.customer, body)


@router.post("/admin/login", response_model=Envelope)
async def admin_login(
    body: LoginRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _login(svc, PrincipalKind.admin, body)


@router.post("/customers/forgot-password", response_model=Envelope)
async def customer_forgot_password(
    body: ForgotPasswordRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _forgot(svc, PrincipalKind.customer, body)


@router.post("/admin/forgot-password", response_model=Envelope)
async def admin_forgot_password(
    body: ForgotPasswordRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _forgot(svc, PrincipalKind.admin, body)


@router.post("/verify-otp", response_model=Envelope)
async def verify_otp(
    body: VerifyOtpRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    # principalKind defaults to customer; admins pass "admin".
    otp = await svc.verify_otp(kind=body.principal_kind, email=body.email, otp_code=body.otp_code)
    return ok("OTP verified successfully", OtpOut.from_row(otp))


@router.post("/customers/reset-password", response_model=Envelope)
async def customer_reset_password(
    body: ResetPasswordRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _reset(svc, PrincipalKind.customer, body)


@router.post("/admin/reset-password", response_model=Envelope)
async def admin_reset_password(
    body: ResetPasswordRequest, svc: AuthService = Depends(auth_service_dep)
) -> JSONResponse:
    return await _reset(svc, PrincipalKind.admin, body)


# --- Module Notes -----------------------------------------------------------
# None of these routes are role-gated: they are how a caller obtains an identity.
