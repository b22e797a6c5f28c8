"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.backend.services.note import NoteService
from tests.factories import make_note


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = NoteRepository(mock_db_session)
            # Test repository methods
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Use this to mock the result of session.execute().

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = Note(id="123")
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalar_one = MagicMock(return_value=0)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.rowcount = 0
    return result


# =============================================================================
# Note Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_store() -> AsyncMock:
    """
    Mock note store.

    Every store method is an AsyncMock; tests set return values as needed.

    Usage:
        async def test_open(mock_store):
            mock_store.get_note.return_value = make_note(body="A")
    """
    store = AsyncMock(spec=NoteService)
    store.insert_note.return_value = make_note("new-note")
    store.delete_note.return_value = True
    store.list_notes.return_value = []
    store.count_notes.return_value = 0
    return store


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
