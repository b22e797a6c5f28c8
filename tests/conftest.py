"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database, created fresh for every test.
    To point them at another database, set TEST_DATABASE_URL:

        export TEST_DATABASE_URL="sqlite+aiosqlite:////tmp/notes-test.db"
"""

import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from modules.backend.models.base import Base
from modules.backend.services.note import NoteService
from modules.backend.services.title import TitlePolicy, TitleRule


# =============================================================================
# Database Configuration
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Returns TEST_DATABASE_URL if set, otherwise uses in-memory SQLite.
    """
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


def is_memory_sqlite() -> bool:
    """Check if using an in-memory SQLite database."""
    return get_test_database_url().endswith(":memory:")


# =============================================================================
# Database Engine Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create the test database engine with all tables.

    In-memory SQLite needs a StaticPool so every session shares the one
    connection (and therefore the one database).
    """
    url = get_test_database_url()

    if is_memory_sqlite():
        engine = create_async_engine(
            url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# Database Session Fixtures
# =============================================================================


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    The note store commits its own writes; isolation comes from the
    per-test engine.

    Usage:
        async def test_insert(db_session: AsyncSession):
            store = NoteService(db_session)
            note = await store.insert_note()
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def note_store(db_session: AsyncSession) -> NoteService:
    """Note store bound to the test session."""
    return NoteService(db_session)


# =============================================================================
# Title Rule Fixtures
# =============================================================================


@pytest.fixture
def first_line_rule() -> TitleRule:
    """Derive titles from the body's first line."""
    return TitleRule(policy=TitlePolicy.FIRST_LINE)


@pytest.fixture
def truncate_rule() -> TitleRule:
    """Derive titles from the body's first nine characters."""
    return TitleRule(policy=TitlePolicy.TRUNCATE, max_length=9)
