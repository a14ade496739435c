"""
Catalog API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets fresh SQLite files under pytest's tmp_path, with the
       schema created from the ORM models and the bundled sample data loaded.
       File-backed databases (not :memory:) give the engine a real connection
       pool, so concurrent fetches behave as they do in production.

Fixture Hierarchy:
    Function-scoped:
    ├── lore_app / catalog_app:        FastAPI apps bound to seeded temp databases
    ├── lore_db / catalog_db:          their persistence handles
    ├── lore_client / catalog_client:  HTTPX AsyncClients over ASGITransport
    ├── broken_client:                 catalog app whose database has no tables
    └── mock_database:                 AsyncMock standing in for Database
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any catalog_api import so the settings singleton sees them
os.environ["LORE_DATABASE_URL"] = "sqlite+aiosqlite:///./test-lore.db"
os.environ["CATALOG_DATABASE_URL"] = "sqlite+aiosqlite:///./test-catalog.db"
os.environ["LOG_LEVEL"] = "WARNING"

from catalog_api.database import CatalogBase, Database, LoreBase, create_schema  # noqa: E402
from catalog_api.main import create_app  # noqa: E402
from catalog_api.seed_data import seed  # noqa: E402


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


async def _seeded_app(variant: str, base, path):
    app = create_app(variant, database_url=sqlite_url(path))
    await create_schema(app.state.database, base)
    await seed(app.state.database, variant)
    return app


# ══════════════════════════════════════════════════════════════════════════
# Apps and databases
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def lore_app(tmp_path):
    app = await _seeded_app("lore", LoreBase, tmp_path / "lore.db")
    yield app
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def catalog_app(tmp_path):
    app = await _seeded_app("catalog", CatalogBase, tmp_path / "catalog.db")
    yield app
    await app.state.database.dispose()


@pytest.fixture
def lore_db(lore_app) -> Database:
    return lore_app.state.database


@pytest.fixture
def catalog_db(catalog_app) -> Database:
    return catalog_app.state.database


# ══════════════════════════════════════════════════════════════════════════
# HTTP clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def lore_client(lore_app):
    """
    HTTPX AsyncClient talking to the lore app in-process.

    Usage:
        async def test_episodes(lore_client):
            response = await lore_client.get("/api/episodes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=lore_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def catalog_client(catalog_app):
    transport = ASGITransport(app=catalog_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(tmp_path):
    """
    Catalog app pointed at an empty SQLite file: every query fails with
    "no such table", which exercises the 500 paths end to end.
    """
    app = create_app("catalog", database_url=sqlite_url(tmp_path / "empty.db"))
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.database.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Mocks
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_database():
    """
    A MagicMock with the Database fetch methods as AsyncMocks.

    Usage:
        mock_database.fetch_value.return_value = 12
        rows, pagination = await paginate(mock_database, query, PageRequest())
    """
    database = MagicMock(spec=Database)
    database.fetch_all = AsyncMock(return_value=[])
    database.fetch_one = AsyncMock(return_value=None)
    database.fetch_value = AsyncMock(return_value=0)
    return database
