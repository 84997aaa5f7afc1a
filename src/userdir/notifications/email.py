"""
userdir.notifications.email

HTTP client boundary for the outbound email service.

Responsibilities:
- Deliver a subject + message to one or more recipients.
- Report delivery as a boolean; transport errors and non-2xx replies are failures.
"""

from __future__ import annotations

from typing import Protocol

import httpx

from userdir.observability.logging import get_logger
from userdir.settings import Settings

log = get_logger(__name__)

SEND_PATH = "/emails/v1/send"


class Notifier(Protocol):
    async def send(self, *, recipients: list[str], subject: str, message: str) -> bool: ...


class HttpEmailNotifier:
    """
    Posts `{emails, subject, message}` to the email service. Never retries.
    """

    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def build_client(cls, settings: Settings) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=settings.notification_base_url.rstrip("/"),
            timeout=httpx.Timeout(settings.notification_timeout_seconds),
        )

    async def send(self, *, recipients: list[str], subject: str, message: str) -> bool:
        try:
            r = await self._http.post(
                SEND_PATH,
                json={"emails": recipients, "subject": subject, "message": message},
            )
        except httpx.HTTPError as e:
            log.warning("email_dispatch_error", error=str(e), error_type=type(e).__name__)
            return False
        if not r.is_success:
            log.warning("email_dispatch_rejected", status_code=r.status_code)
            return False
        return True


# --- Module Notes -----------------------------------------------------------
# Tests and local runs swap this for any object satisfying `Notifier` through the
# `api.deps.notifier_dep` dependency.
