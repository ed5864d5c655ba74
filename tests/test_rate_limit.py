"""Tests du rate limiting / Rate limiting tests."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from vehicle_log.config import RateLimitSettings
from vehicle_log.rate_limit import build_limiter, limiter


def _limited_app(rate_limit: RateLimitSettings) -> FastAPI:
    """App minimale cablee comme main.py / Minimal app wired like main.py."""
    app = FastAPI()
    app.state.limiter = build_limiter(rate_limit)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    return app


@pytest.fixture
async def limited_client():
    transport = ASGITransport(app=_limited_app(RateLimitSettings(default="2/minute")))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_limit_exceeded(limited_client):
    assert (await limited_client.get("/ping")).status_code == 200
    assert (await limited_client.get("/ping")).status_code == 200
    resp = await limited_client.get("/ping")
    assert resp.status_code == 429


@pytest.mark.asyncio
async def test_disabled_limiter_lets_everything_through():
    app = _limited_app(RateLimitSettings(enabled=False, default="1/minute"))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        for _ in range(3):
            assert (await ac.get("/ping")).status_code == 200


def test_app_limiter_is_disabled_for_tests():
    assert limiter.enabled is False
