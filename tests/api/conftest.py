"""API test fixtures — async SQLite DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with FK enforcement on
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager points at the test engine (readiness probe)

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
    - Helper fixtures create records through the public API, not the ORM
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from library_api.db.base import Base
from library_api.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from library_api.main import app
import library_api.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db_manager


@pytest.fixture
async def auth_headers(client):
    """Register + login a user; returns a bearer Authorization header."""
    credentials = {"email": "reader@example.com", "password": "s3cret-pass"}
    res = await client.post(
        "/api/auth/register", json={**credentials, "username": "reader"},
    )
    assert res.status_code == 201
    res = await client.post("/api/auth/login", json=credentials)
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['data']['token']}"}


@pytest.fixture
def create_genre(client):
    async def _create(name: str, description: str | None = None) -> dict:
        res = await client.post(
            "/api/genres", json={"name": name, "description": description},
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


@pytest.fixture
def create_book(client):
    async def _create(title: str, price: float = 10.0, **fields) -> dict:
        payload = {
            "title": title,
            "writer": fields.pop("writer", "Some Writer"),
            "publisher": "Acme Press",
            "publication_year": 2020,
            "price": price,
            **fields,
        }
        res = await client.post("/api/books", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create
