"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Services are built exactly as in production, against the test engine
    - The API client talks to the real app with app.state.services replaced

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and
      route tests (PostgreSQL collation is not exercised here)
    - StaticPool: every session shares the one in-memory connection, so the
      fan-out's independent sessions all see the same data
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from folio.config import Settings
from folio.db.base import Base
from folio.infrastructure.database import DatabaseSessionManager
from folio.models.entity import EntityRow  # noqa: F401
from folio.models.entity_version import EntityVersionRow  # noqa: F401
from folio.models.index_row import IndexRow  # noqa: F401
from folio.services.registry import build_services


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        log_format="text",
        listing_timeout_seconds=5.0,
    )


@pytest.fixture
def services(db, settings):
    return build_services(db, settings)


@pytest.fixture
async def client(services):
    """FastAPI test client with the Services container replaced."""
    from folio.main import app

    app.state.services = services
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.services
