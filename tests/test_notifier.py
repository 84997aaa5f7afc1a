"""
tests.test_notifier

HTTP email notifier against an in-process transport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from userdir.notifications.email import HttpEmailNotifier
from userdir.settings import Settings


def _notifier(handler) -> HttpEmailNotifier:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://mail.test/api"
    )
    return HttpEmailNotifier(http=http)


@pytest.mark.asyncio
async def test_send_posts_expected_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    sent = await _notifier(handler).send(
        recipients=["john@example.com"], subject="Password reset code", message="1234"
    )

    assert sent is True
    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/emails/v1/send"
    assert json.loads(seen[0].content) == {
        "emails": ["john@example.com"],
        "subject": "Password reset code",
        "message": "1234",
    }


@pytest.mark.asyncio
async def test_non_success_reply_is_failure() -> None:
    sent = await _notifier(lambda _: httpx.Response(502)).send(
        recipients=["a@b.c"], subject="s", message="m"
    )
    assert sent is False


@pytest.mark.asyncio
async def test_transport_error_is_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    sent = await _notifier(handler).send(recipients=["a@b.c"], subject="s", message="m")
    assert sent is False


def test_build_client_uses_configured_timeout() -> None:
    settings = Settings(notification_base_url="http://mail.test/api/", notification_timeout_seconds=5)

    client = HttpEmailNotifier.build_client(settings)

    assert str(client.base_url) == "http://mail.test/api/"
    assert client.timeout.connect == 5
