"""
Cookbook Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the whole suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool, so all sessions share the one connection) with the
       tables created from Base.metadata.

Fixture Hierarchy:
    engine ─▶ session_factory ─┬─▶ session ─▶ store ─▶ catalog
                               └─▶ test_client (app with overridden session + image dir)

Service tests use `store`; API tests use `test_client` only, so the two
never hold transactions on the shared connection at the same time.
"""

import os
import tempfile

# Settings are read at import time: configure the environment first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="cookbook_test_")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_ON_STARTUP"] = "false"

from typing import Dict  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import cookbook.models  # noqa: E402,F401
from cookbook.config import settings  # noqa: E402
from cookbook.database import Base, build_session_factory, get_db_session  # noqa: E402
from cookbook.models import Ingredient, Recipe, Unit  # noqa: E402
from cookbook.routes.deps import get_file_service  # noqa: E402
from cookbook.services.file_service import FileService  # noqa: E402
from cookbook.services.seed_service import SeedService  # noqa: E402
from cookbook.services.store import DocumentStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session):
    return DocumentStore(session)


@pytest_asyncio.fixture
async def catalog(store) -> Dict[str, Dict[str, str]]:
    """
    The bundled dataset loaded into the store.

    Returns name → id maps: {"ingredients": {...}, "units": {...}, "recipes": {title: id}}
    """
    seeder = SeedService(store, settings.seed_file)
    await seeder.seed_catalog_if_empty()
    await seeder.reload_recipes()
    return {
        "ingredients": {i.name: str(i.id) for i in await store.list(Ingredient)},
        "units": {u.name: str(u.id) for u in await store.list(Unit)},
        "recipes": {r.title: str(r.id) for r in await store.list(Recipe)},
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(engine, session_factory, tmp_path):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The lifespan does not run under ASGITransport, so the engine is put on
    app.state by hand (for /health) and the session dependency is replaced
    by one bound to the test database.
    """
    from cookbook.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.state.engine = engine
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_file_service] = lambda: FileService(str(tmp_path / "images"))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded_client(test_client, session_factory):
    """test_client with the bundled ingredients and units already inserted."""
    async with session_factory() as session:
        await SeedService(DocumentStore(session), settings.seed_file).seed_catalog_if_empty()
        await session.commit()
    return test_client


@pytest_asyncio.fixture
async def user_headers(test_client) -> Dict[str, str]:
    """Signs up a user through the API and returns the auth gate header."""
    response = await test_client.post(
        "/users", json={"email": "chef@example.com", "password": "s3cret-pass"}
    )
    assert response.status_code == 200
    return {"X-User-Id": response.json()["id"]}


@pytest.fixture
def sample_image_bytes():
    """Minimal PNG signature + IHDR chunk; enough for extension/size checks."""
    return (
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
        b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    )
