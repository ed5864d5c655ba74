"""Fixtures de test / Test fixtures.

La base SQLite de test et la configuration sont fixees avant l'import de l'app.
The test SQLite database and settings are pinned before the app is imported.
"""

import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="vehicle_log_tests_"))
os.environ["VL__DATABASE__URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["VL__RATE_LIMIT__ENABLED"] = "false"
os.environ["CONFIG_FILE"] = str(_TMP_DIR / "missing-config.yml")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from vehicle_log.database import Base, async_session, engine  # noqa: E402
from vehicle_log.main import app  # noqa: E402


@pytest.fixture(autouse=True)
async def database():
    """Schema neuf pour chaque test / Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db():
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def user(client):
    resp = await client.post(
        "/users",
        json={
            "first_name": "Ada",
            "last_name": "Lovelace",
            "username": "ada",
            "email": "ada@gmail.com",
        },
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
async def vehicle(client, user):
    resp = await client.post(
        "/vehicles",
        json={"owner_id": user["id"], "make": "Volvo", "model": "240", "year": 1988},
    )
    assert resp.status_code == 201
    return resp.json()
