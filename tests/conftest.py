"""Pytest configuration for all tests."""

from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from flexdata.core.config import get_settings
from flexdata.domain.entities import Field, Row
from flexdata.infrastructure.persistence.database import Base, enable_sqlite_foreign_keys
from tests.fakes import FakeSyncAdapter


@pytest.fixture
def row_adapter() -> FakeSyncAdapter:
    return FakeSyncAdapter(Row)


@pytest.fixture
def field_adapter() -> FakeSyncAdapter:
    return FakeSyncAdapter(Field)


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    """Point file storage at a temporary directory."""
    path = tmp_path / "files"
    monkeypatch.setenv("FLEXDATA_STORAGE_PATH", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    import flexdata.infrastructure.persistence.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from flexdata.infrastructure.api.app import app
    from flexdata.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def project(client: AsyncClient) -> dict[str, Any]:
    response = await client.post("/admin/v1/projects", json={"name": "Portfolio Site"})
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def collection(client: AsyncClient, project: dict[str, Any]) -> dict[str, Any]:
    response = await client.post(
        f"/admin/v1/projects/{project['id']}/collections", json={"name": "songs"}
    )
    assert response.status_code == 201
    return response.json()
