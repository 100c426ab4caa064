"""
Database Connection Management

One async SQLAlchemy engine per process, opened by the application lifespan
(or the seeding CLI) and shared by every request through ``get_db``.
"""

import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from order_analytics.config import get_settings
from order_analytics.database.models import Base

logger = structlog.get_logger(__name__)


@dataclass
class _DatabaseState:
    engine: Optional[AsyncEngine] = None
    sessions: Optional[async_sessionmaker[AsyncSession]] = None


_state = _DatabaseState()


def _engine_options(url: str) -> Dict[str, Any]:
    """Pooling per backend: asyncpg pools itself, in-memory SQLite must share one connection."""
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"poolclass": NullPool, "pool_pre_ping": True}


async def init_database(url: Optional[str] = None) -> AsyncEngine:
    """
    Open the engine and verify the catalog database answers.

    Args:
        url: Async database URL; defaults to DATABASE_URL or the POSTGRES_* settings

    Raises:
        Any driver error from the connectivity check; the engine is disposed first
    """
    if _state.engine is not None:
        logger.warning("Database already initialized", url=_render(_state.engine))
        return _state.engine

    settings = get_settings()
    url = url or settings.database.async_url

    engine = create_async_engine(url, echo=settings.database.echo, **_engine_options(url))
    _state.engine = engine
    _state.sessions = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Failed to connect to database", url=_render(engine), error=str(e))
        await close_database()
        raise

    logger.info("Database connection established", url=_render(engine), dialect=engine.dialect.name)
    return engine


def _render(engine: AsyncEngine) -> str:
    return engine.url.render_as_string(hide_password=True)


async def create_tables() -> None:
    """Create the catalog tables that do not exist yet."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", tables=sorted(Base.metadata.tables))


async def close_database() -> None:
    """Dispose of the engine; a later init_database opens a fresh one."""
    engine = _state.engine
    if engine is None:
        return

    _state.engine = None
    _state.sessions = None
    await engine.dispose()
    logger.info("Database engine disposed", url=_render(engine))


def get_engine() -> AsyncEngine:
    """
    The process-wide engine.

    Raises:
        RuntimeError: If init_database has not been awaited
    """
    if _state.engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _state.engine


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Session scope: commit when the block succeeds, roll back and re-raise otherwise.

    Example:
        async with get_db() as db:
            snapshot = await load_catalog(db)
    """
    if _state.sessions is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with _state.sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
            await session.rollback()
            raise


async def get_db_dependency() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with get_db() as session:
        yield session


async def check_database_health() -> Dict[str, Any]:
    """
    Round-trip a trivial query.

    Returns:
        {"status": "healthy", "latency_ms": ...} or {"status": "unhealthy", "error": ...}
    """
    start = time.perf_counter()
    try:
        async with get_db() as db:
            await db.execute(text("SELECT 1"))
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "latency_ms": round((time.perf_counter() - start) * 1000, 2),
    }
