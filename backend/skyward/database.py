"""
Skyward Notes — Database Engine & Session Management
=====================================================

What:  Async SQLAlchemy engine construction, session factory, and the
       per-request session dependency.
How:   create_app() builds ONE engine from settings (or accepts an injected
       one) and stores it with its session factory on `app.state`. Each
       request opens one session from that factory and closes it at the end.
Who:   Used by create_app(), the notebook/health routes and the tests.

No process-wide connection singleton exists: whoever builds the app decides
which engine backs it. Tests hand in an in-memory SQLite engine.

Connection Pooling (MySQL):
    pool_pre_ping:  Validates connections before use (catches stale connections)
    pool_recycle:   Recycles connections before MySQL's wait_timeout kills them
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from skyward.config import Settings
from skyward.exceptions import ConfigurationError


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic and the test
    fixtures that create the schema in memory.
    """
    pass


# ── Engine Construction ───────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine described by `settings`.

    SQLite URLs skip the pool options, which only apply to server databases.

    Raises:
        ConfigurationError: The URL cannot be parsed or names an unknown driver.
    """
    options = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=settings.db_pool_recycle,
        )
    try:
        return create_async_engine(settings.database_url, **options)
    except (ArgumentError, ImportError) as e:
        raise ConfigurationError(
            message="Could not create the database engine from the configured URL",
            context={"error_type": type(e).__name__, "detail": str(e)},
        ) from e


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: store methods commit and then hand ORM objects
    back to the handler, which reads their attributes afterwards.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    How it works:
        1. Opens a session from the factory stored on app.state
        2. Yields it to the route (the NoteStore commits its own statements)
        3. On error: rolls back whatever is pending, then re-raises
        4. Always: closes the session (returns the connection to the pool)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
