"""Pytest configuration and shared fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("API_BASE_URL", "http://testserver/api")
os.environ.setdefault("DEBUG", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import elderease.models  # noqa: F401  (registers every table)
from elderease.db.database import Base, enable_sqlite_foreign_keys, get_db
from elderease.db.init_db import seed_catalog
from elderease.main import app
from elderease.client.api import ElderEaseClient
from elderease.client.session import SessionStore
from elderease.client.storage import MemoryKeyValueStore


@pytest_asyncio.fixture()
async def engine():
    # One shared in-memory database per test
    engine = enable_sqlite_foreign_keys(
        create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        await seed_catalog(session)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def http_client(session_factory):
    """httpx client talking to the ASGI app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def api(http_client):
    """ElderEaseClient routed through the in-process app."""
    client = ElderEaseClient(
        http=AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver/api",
        )
    )
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture()
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture()
def session_store(kv_store):
    store = SessionStore(kv_store)
    yield store
    store.close()
