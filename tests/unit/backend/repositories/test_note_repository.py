"""
Unit Tests for Note Repository.

Tests repository behaviour against a mocked session.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from modules.backend.core.exceptions import NotFoundError
from modules.backend.repositories.note import NoteRepository


class TestLookup:
    """Tests for id lookups."""

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises(self, mock_db_session, mock_db_result):
        """Should raise NotFoundError naming the model."""
        mock_db_session.execute.return_value = mock_db_result
        repo = NoteRepository(mock_db_session)

        with pytest.raises(NotFoundError, match="Note not found"):
            await repo.get_by_id("missing")

    @pytest.mark.asyncio
    async def test_get_by_id_or_none_missing(self, mock_db_session, mock_db_result):
        """Should return None for unknown ids."""
        mock_db_session.execute.return_value = mock_db_result
        repo = NoteRepository(mock_db_session)

        assert await repo.get_by_id_or_none("missing") is None


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_delete_reports_removed_row(self, mock_db_session, mock_db_result):
        """Should return True when a row was deleted."""
        mock_db_result.rowcount = 1
        mock_db_session.execute.return_value = mock_db_result
        repo = NoteRepository(mock_db_session)

        assert await repo.delete("note-1") is True
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, mock_db_session, mock_db_result):
        """Should return False when nothing matched."""
        mock_db_session.execute.return_value = mock_db_result
        repo = NoteRepository(mock_db_session)

        assert await repo.delete("missing") is False


class TestUpdateContent:
    """Tests for update_content."""

    @pytest.mark.asyncio
    async def test_missing_note_returns_none(self, mock_db_session):
        """Should not flush when the note is gone."""
        repo = NoteRepository(mock_db_session)

        with patch.object(repo, "get_by_id_or_none", return_value=None):
            assert await repo.update_content("gone", body="x") is None

        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bumps_modified_at_without_fields(self, mock_db_session):
        """Should advance modified_at even when no field is given."""
        stamp = datetime(2030, 1, 1)
        note = SimpleNamespace(title="T", body="B", modified_at=stamp)
        repo = NoteRepository(mock_db_session)

        with patch.object(repo, "get_by_id_or_none", return_value=note):
            result = await repo.update_content("note-1")

        assert result.modified_at > stamp
        assert (result.title, result.body) == ("T", "B")
        mock_db_session.flush.assert_awaited_once()
