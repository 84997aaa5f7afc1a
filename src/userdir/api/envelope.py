"""
userdir.api.envelope

Uniform response envelope: `{status, data, message}`.

Responsibilities:
- Render success payloads into the envelope.
- Map `ServiceError`s (and anything unexpected) onto envelope + HTTP status.
- Register the exception handlers that guarantee every response uses the envelope.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_200_OK, HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from userdir.errors import MISSING_FIELDS, ServiceError
from userdir.observability.logging import get_logger

log = get_logger(__name__)


class Envelope(BaseModel):
    status: bool
    data: Any = None
    message: str


def ok(message: str, data: Any = None, *, status_code: int = HTTP_200_OK) -> JSONResponse:
    body = Envelope(status=True, data=jsonable_encoder(data, by_alias=True), message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def error_body(err: ServiceError) -> tuple[int, dict[str, Any]]:
    return err.status_code, Envelope(status=False, data=None, message=err.message).model_dump()


def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope(status=False, data=None, message=message).model_dump(),
    )


async def _service_error_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ServiceError)
    status_code, body = error_body(exc)
    return JSONResponse(status_code=status_code, content=body)


async def _request_validation_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    errors = exc.errors()
    if all(e.get("loc", ("body",))[0] == "body" for e in errors):
        return _fail(HTTP_400_BAD_REQUEST, MISSING_FIELDS)
    return _fail(HTTP_400_BAD_REQUEST, "Invalid request parameters")


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    return _fail(exc.status_code, str(exc.detail))


async def _unhandled_handler(_: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_exception", error_type=type(exc).__name__)
    return _fail(HTTP_500_INTERNAL_SERVER_ERROR, f"An error occurred: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_handler)


# --- Module Notes -----------------------------------------------------------
# Services raise; routers return `ok(...)`. No handler builds a failure envelope by
# hand, so the status-code mapping lives only in `userdir.errors.ErrorKind`.
