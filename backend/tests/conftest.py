"""
Skyward Notes — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite) with the
       `notes` table created from the ORM metadata. No MySQL server needed.

Fixture Hierarchy (all function-scoped):
    ├── engine:       In-memory async engine (StaticPool: one shared connection)
    ├── db_session:   Session from the app's own session factory
    ├── clock:        Controllable clock; each reading is one minute later
    ├── store:        NoteStore bound to db_session and clock
    ├── handler:      NotebookHandler over store
    └── test_client:  HTTPX AsyncClient talking to create_app(engine=engine)
"""

import os
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings for testing BEFORE any app imports
# Why: skyward.main builds its module-level app from the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from skyward.config import Settings  # noqa: E402
from skyward.database import Base, build_session_factory, get_db_session  # noqa: E402
from skyward.models.note import Note  # noqa: E402, F401
from skyward.services.note_store import NoteStore  # noqa: E402
from skyward.services.request_handler import NotebookHandler  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


class SteppingClock:
    """
    Deterministic clock: every call returns a time one minute after the last.

    Lets tests assert ordering by updated_at without sleeping.
    """

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0, 0)):
        self.current = start
        self.readings = []

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(minutes=1)
        self.readings.append(self.current)
        return self.current


@pytest_asyncio.fixture
async def engine():
    """
    Provides an in-memory database with the schema already created.

    StaticPool + check_same_thread=False keep every session on the SAME
    connection, otherwise each connection would see its own empty database.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def store(db_session, clock):
    return NoteStore(db_session, clock=clock)


@pytest.fixture
def handler(store):
    return NotebookHandler(store)


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL=TEST_DATABASE_URL, log_level="WARNING")


@pytest.fixture
def app(engine, clock, test_settings):
    """
    Provides a fully assembled application bound to the test engine.

    The NoteStore dependency is overridden only to inject the stepping clock.
    """
    from skyward.main import create_app
    from skyward.routes.notebook import get_note_store

    application = create_app(settings=test_settings, engine=engine)

    def store_with_clock(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
        return NoteStore(db, clock=clock)

    application.dependency_overrides[get_note_store] = store_with_clock
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Redirects are NOT followed automatically so tests can assert on them.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
