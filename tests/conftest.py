"""
NoteKeeper Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── clock: deterministic, strictly increasing UTC clock
    ├── memory_repository: fresh InMemoryNoteRepository
    ├── note_service: NoteService over memory_repository and clock
    ├── sql_session: AsyncSession on a private in-memory SQLite database
    ├── repository: parametrized over both NoteRepository implementations
    ├── mock_repository: AsyncMock standing in for a NoteRepository
    ├── test_client: HTTPX AsyncClient with note_service injected into the app
    └── sql_client: HTTPX AsyncClient on the SQL backend, one session per request
"""

import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time, so the environment is prepared before
# any notekeeper module is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notekeeper.database import Base  # noqa: E402
from notekeeper.dependencies import get_note_service  # noqa: E402
from notekeeper.repositories.base import NoteRepository  # noqa: E402
from notekeeper.repositories.memory import InMemoryNoteRepository  # noqa: E402
from notekeeper.repositories.sql import SqlAlchemyNoteRepository  # noqa: E402
from notekeeper.services.note_service import NoteService  # noqa: E402


class FakeClock:
    """Returns start, start+step, start+2*step, ... on successive calls."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 11, 9, 14, 30, tzinfo=timezone.utc))


@pytest.fixture
def memory_repository():
    return InMemoryNoteRepository()


@pytest.fixture
def note_service(memory_repository, clock):
    return NoteService(memory_repository, clock=clock)


@pytest.fixture
def mock_repository():
    """
    Provides a mock NoteRepository.

    Usage:
        mock_repository.find_by_id.return_value = note
        result = await NoteService(mock_repository).get_note(note.id)
    """
    return AsyncMock(spec=NoteRepository)


@pytest_asyncio.fixture
async def sql_session():
    """
    Provides an AsyncSession on a throwaway in-memory SQLite database.

    StaticPool keeps the single connection (and therefore the database)
    alive for the whole test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request, sql_session):
    """Runs a contract test once per NoteRepository implementation."""
    if request.param == "memory":
        return InMemoryNoteRepository()
    return SqlAlchemyNoteRepository(sql_session)


@pytest_asyncio.fixture
async def test_client(note_service):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's NoteService dependency is replaced by `note_service`, so tests
    can seed data through the service and observe it over HTTP.
    """
    from notekeeper.main import app

    app.dependency_overrides[get_note_service] = lambda: note_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sql_client(monkeypatch):
    """
    HTTP client for the app running with STORAGE_BACKEND=sql.

    No dependency overrides: each request gets its own session from
    database.session_scope(), bound to a private in-memory SQLite engine.
    """
    from notekeeper import database
    from notekeeper.config import settings
    from notekeeper.main import app

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    monkeypatch.setattr(settings, "storage_backend", "sql")
    monkeypatch.setattr(
        database, "async_session_factory", async_sessionmaker(engine, expire_on_commit=False)
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    await engine.dispose()
