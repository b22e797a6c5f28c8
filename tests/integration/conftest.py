"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real SQLite database and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from modules.backend.core.config import get_app_config, get_settings
from modules.backend.services.note import NoteService


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
async def other_store(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[NoteService, None]:
    """
    A second store on the same database, through its own session.

    Usage:
        async def test_visible(note_store, other_store):
            note = await note_store.insert_note()
            assert await other_store.get_note(note.id)
    """
    async with db_session_factory() as session:
        yield NoteService(session)


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """
    Point the CLI at a throwaway SQLite file.

    Sets NOTEPAD_DATABASE_URL and clears the cached settings so every
    command in the test uses the file under tmp_path.
    """
    url = f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"
    monkeypatch.setenv("NOTEPAD_DATABASE_URL", url)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield url
    get_settings.cache_clear()
    get_app_config.cache_clear()
