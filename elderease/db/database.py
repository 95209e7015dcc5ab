"""
Database Module

Async SQLAlchemy engine, session factory and declarative Base.

- engine: one per process, created at import time (no connection yet)
- AsyncSessionLocal: factory used by get_db and by scripts
- get_db: FastAPI dependency yielding a session per request
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from elderease.core.config import settings

logger = logging.getLogger(__name__)


# ============================================================
# Declarative Base
# ============================================================
class Base(DeclarativeBase):
    """Base class for every SQLAlchemy model."""


# ============================================================
# Engine
# ============================================================
def _engine_kwargs(database_url: str) -> dict:
    """Pool options only apply to server databases, not SQLite."""
    kwargs = {"echo": settings.SQLALCHEMY_ECHO, "future": True}
    if make_url(database_url).get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
    return kwargs


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> AsyncEngine:
    """
    Turn on foreign key enforcement for every SQLite connection.

    SQLite ships with it off, which would silently skip the ON DELETE
    CASCADE from users to their preferences, progress and bookmarks.
    Other backends are returned untouched.
    """
    if async_engine.dialect.name == "sqlite":
        event.listen(async_engine.sync_engine, "connect", _enable_foreign_keys)
    return async_engine


engine = enable_sqlite_foreign_keys(
    create_async_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# ============================================================
# FastAPI Dependency
# ============================================================
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a database session for one request.

    Usage in FastAPI endpoints:
        @router.get("/")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# ============================================================
# Schema / Health Helpers
# ============================================================
async def init_models() -> None:
    """Create all tables that don't exist yet (development convenience)."""
    # Import models so they register on Base.metadata
    import elderease.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def check_db_connection() -> bool:
    """
    Check if the database is reachable.

    Returns:
        True if a trivial query succeeds, False otherwise
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
