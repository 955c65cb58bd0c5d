"""
NoteKeeper Backend - Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and transactional session scope.
How:   Creates an async engine with connection pooling; session_scope()
       commits on success and rolls back on error.
Who:   Used by the request dependency in dependencies.py, by the health
       check, and by Alembic (through Base.metadata).
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs (tests, local runs) get the dialect's default pool, which
    does not accept the sizing arguments.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notekeeper.config import settings


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, outside the
# session context (no lazy reload on access)
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every table registers with this metadata, which Alembic reads for
    --autogenerate.
    """
    pass


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a transactional session.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (repositories flush, never commit)
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the application lifespan."""
    await engine.dispose()
