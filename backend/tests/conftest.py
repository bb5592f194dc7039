"""
Gebeta Backend: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment overrides are applied before any `app` module is imported,
       so the engine and settings singletons are built for testing: a SQLite
       file in a temp directory, no Gemini key, quiet logging.

Fixtures (all function-scoped):
    ├── database:     creates every table, drops them and disposes the engine after
    ├── db:           AsyncSession on the test database (service-level tests)
    ├── test_client:  HTTPX AsyncClient against the full ASGI app
    └── make_business / make_menu_item: create records through the API
"""

import os
import tempfile

# Must run before anything imports app.config
_TEST_DIR = tempfile.mkdtemp(prefix="gebeta_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["GEMINI_API_KEY"] = ""
os.environ["CORS_ORIGINS"] = "http://localhost:3000,http://localhost:5173"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import async_session_factory, dispose_engine, drop_models, init_models  # noqa: E402


@pytest_asyncio.fixture
async def database():
    """Fresh schema per test; the engine is disposed so no connection outlives its event loop."""
    await init_models()
    yield
    await drop_models()
    await dispose_engine()


@pytest_asyncio.fixture
async def db(database):
    """
    Provides an AsyncSession for calling services directly.

    Usage:
        async def test_create(db):
            business = await business_service.create_business(db, data)
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def business_payload():
    return {
        "name": "Student Center Cafeteria",
        "category": "on-campus",
        "location": {"address": "Main Campus, Building A"},
        "description": "The heart of campus dining.",
        "isFeatured": True,
    }


@pytest.fixture
def make_business(test_client, business_payload):
    """Factory: POST /api/businesses with overrides, returns the created document."""

    async def _make(**overrides):
        payload = {**business_payload, **overrides}
        response = await test_client.post("/api/businesses", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def make_menu_item(test_client):
    """Factory: POST /api/menu for a business id, returns the created document."""

    async def _make(business_id, **overrides):
        payload = {"businessId": business_id, "name": "Shiro", "price": 120, **overrides}
        response = await test_client.post("/api/menu", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
