"""
tests.test_smoke

Smoke tests: the app boots, probes answer, and unknown routes still use the envelope.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "UP"}

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/health", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: httpx.AsyncClient) -> None:
    r = await client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"status": False, "data": None, "message": "Not Found"}
