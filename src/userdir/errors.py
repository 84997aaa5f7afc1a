"""
userdir.errors

Failure taxonomy shared by services, the role gate and the API layer.

Responsibilities:
- Name every failure kind the service can report and the HTTP status it maps to.
- Provide typed exceptions that services raise instead of HTTP exceptions.
- Convert unexpected exceptions into `InternalError` at service boundaries.
"""

from __future__ import annotations

import asyncio
import enum
import functools
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, ParamSpec, TypeVar

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from userdir.observability.logging import get_logger

log = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class ErrorKind(enum.StrEnum):
    validation = "VALIDATION"
    not_found = "NOT_FOUND"
    unauthorized = "UNAUTHORIZED"
    forbidden = "FORBIDDEN"
    internal = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.validation: HTTP_400_BAD_REQUEST,
    ErrorKind.not_found: HTTP_404_NOT_FOUND,
    ErrorKind.unauthorized: HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: HTTP_403_FORBIDDEN,
    ErrorKind.internal: HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    """
    Base class for expected failures. `message` is safe to show to callers.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.internal

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationError(ServiceError):
    kind = ErrorKind.validation


class NotFoundError(ServiceError):
    kind = ErrorKind.not_found


class UnauthorizedError(ServiceError):
    kind = ErrorKind.unauthorized


class ForbiddenError(ServiceError):
    kind = ErrorKind.forbidden


class InternalError(ServiceError):
    kind = ErrorKind.internal


MISSING_FIELDS = "Missing required fields"


def require_fields(**fields: Any) -> None:
    # Empty strings count as missing, matching how clients submit blank form fields.
    if any(v is None or v == "" for v in fields.values()):
        raise ValidationError(MISSING_FIELDS)


def service_operation(
    fn: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """
    Wrap a service coroutine method so that only `ServiceError`s escape it.

    The owning object must expose `_settings.operation_timeout_seconds`; the whole
    operation (store calls, hashing, dispatch) runs under that deadline.
    """

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        owner = args[0]
        timeout = owner._settings.operation_timeout_seconds  # type: ignore[attr-defined]
        try:
            async with asyncio.timeout(timeout):
                return await fn(*args, **kwargs)
        except ServiceError:
            raise
        except TimeoutError as e:
            log.error("operation_timed_out", operation=fn.__qualname__, timeout=timeout)
            raise InternalError("An error occurred: operation timed out") from e
        except Exception as e:
            log.exception("operation_failed", operation=fn.__qualname__)
            raise InternalError(f"An error occurred: {e}") from e

    return wrapper


# --- Module Notes -----------------------------------------------------------
# The HTTP rendering of these errors lives in `api.envelope`; nothing in this module
# knows about responses, so the mapping can be exercised without a running app.
