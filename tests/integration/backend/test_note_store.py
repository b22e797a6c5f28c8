"""
Integration Tests for the Note Store.

Runs NoteService against a real in-memory SQLite database.
"""

import pytest

from modules.backend.core.exceptions import NotFoundError
from modules.backend.schemas.note import NoteUpdate, SortOrder
from modules.backend.services.note import NoteService

pytestmark = pytest.mark.integration


async def _note(store: NoteService, title: str, body: str = "") -> str:
    note = await store.insert_note()
    await store.update_note(note.id, NoteUpdate(title=title, body=body))
    return note.id


class TestInsertAndGet:
    """Tests for insert_note and get_note."""

    @pytest.mark.asyncio
    async def test_insert_creates_empty_note(self, note_store):
        """Should create a note with empty title and body."""
        note = await note_store.insert_note()

        fetched = await note_store.get_note(note.id)
        assert fetched.title == ""
        assert fetched.body == ""
        assert fetched.created_at == fetched.modified_at

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, note_store):
        """Should assign a fresh id to every insert."""
        first = await note_store.insert_note()
        second = await note_store.insert_note()

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, note_store):
        """Should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await note_store.get_note("no-such-note")

    @pytest.mark.asyncio
    async def test_writes_visible_to_other_sessions(self, note_store, other_store):
        """Should commit before returning."""
        note_id = await _note(note_store, "Shared", "text")

        fetched = await other_store.get_note(note_id)
        assert fetched.title == "Shared"


class TestUpdate:
    """Tests for update_note."""

    @pytest.mark.asyncio
    async def test_update_writes_fields(self, note_store):
        """Should persist title and body."""
        note = await note_store.insert_note()

        updated = await note_store.update_note(note.id, NoteUpdate(title="T", body="B"))

        assert updated.title == "T"
        assert updated.body == "B"
        fetched = await note_store.get_note(note.id)
        assert (fetched.title, fetched.body) == ("T", "B")

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_field(self, note_store):
        """Should only write fields that were set."""
        note_id = await _note(note_store, "Keep", "old")

        await note_store.update_note(note_id, NoteUpdate(body="new"))

        fetched = await note_store.get_note(note_id)
        assert fetched.title == "Keep"
        assert fetched.body == "new"

    @pytest.mark.asyncio
    async def test_modified_at_strictly_increases(self, note_store):
        """Should advance modified_at on every update, even back to back."""
        note = await note_store.insert_note()
        stamps = [note.modified_at]

        for i in range(5):
            updated = await note_store.update_note(note.id, NoteUpdate(body=str(i)))
            stamps.append(updated.modified_at)

        assert all(a < b for a, b in zip(stamps, stamps[1:]))

    @pytest.mark.asyncio
    async def test_created_at_unchanged(self, note_store):
        """Should never rewrite created_at."""
        note = await note_store.insert_note()

        updated = await note_store.update_note(note.id, NoteUpdate(body="x"))

        assert updated.created_at == note.created_at

    @pytest.mark.asyncio
    async def test_update_missing_note_returns_none(self, note_store):
        """Should not recreate a deleted note."""
        note = await note_store.insert_note()
        await note_store.delete_note(note.id)

        result = await note_store.update_note(note.id, NoteUpdate(body="late"))

        assert result is None
        assert await note_store.count_notes() == 0


class TestDelete:
    """Tests for delete_note."""

    @pytest.mark.asyncio
    async def test_delete_then_get(self, note_store):
        """Should remove the note."""
        note = await note_store.insert_note()

        assert await note_store.delete_note(note.id) is True
        with pytest.raises(NotFoundError):
            await note_store.get_note(note.id)

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, note_store):
        """Should report False for a second delete and not raise."""
        note = await note_store.insert_note()
        await note_store.delete_note(note.id)

        assert await note_store.delete_note(note.id) is False
        assert await note_store.delete_note("never-existed") is False


class TestList:
    """Tests for list_notes and count_notes."""

    @pytest.mark.asyncio
    async def test_most_recent_first(self, note_store):
        """Should order by modified_at descending by default."""
        first = await _note(note_store, "first")
        second = await _note(note_store, "second")
        await note_store.update_note(first, NoteUpdate(body="touched"))

        summaries = await note_store.list_notes()

        assert [s.id for s in summaries] == [first, second]

    @pytest.mark.asyncio
    async def test_oldest_first(self, note_store):
        """Should support ascending modification order."""
        first = await _note(note_store, "first")
        second = await _note(note_store, "second")

        summaries = await note_store.list_notes(SortOrder.MODIFIED_ASC)

        assert [s.id for s in summaries] == [first, second]

    @pytest.mark.asyncio
    async def test_title_order_is_case_insensitive(self, note_store):
        """Should sort titles alphabetically ignoring case."""
        await _note(note_store, "banana")
        await _note(note_store, "Apple")
        await _note(note_store, "cherry")

        summaries = await note_store.list_notes(SortOrder.TITLE_ASC)

        assert [s.title for s in summaries] == ["Apple", "banana", "cherry"]

    @pytest.mark.asyncio
    async def test_title_filter(self, note_store):
        """Should match a case-insensitive substring of the title."""
        await _note(note_store, "Groceries")
        await _note(note_store, "grocery run")
        await _note(note_store, "Work")

        summaries = await note_store.list_notes(query="GROC")

        assert sorted(s.title for s in summaries) == ["Groceries", "grocery run"]
        assert await note_store.count_notes("GROC") == 2

    @pytest.mark.asyncio
    async def test_filter_wildcards_are_literal(self, note_store):
        """Should treat % and _ in the query as plain characters."""
        await _note(note_store, "100% done")
        await _note(note_store, "1000 things")

        summaries = await note_store.list_notes(query="0%")

        assert [s.title for s in summaries] == ["100% done"]

    @pytest.mark.asyncio
    async def test_paging(self, note_store):
        """Should apply limit and offset after ordering."""
        ids = [await _note(note_store, f"n{i}") for i in range(4)]

        page = await note_store.list_notes(SortOrder.MODIFIED_ASC, limit=2, offset=1)

        assert [s.id for s in page] == ids[1:3]
        assert await note_store.count_notes() == 4

    @pytest.mark.asyncio
    async def test_empty_store(self, note_store):
        """Should return an empty list."""
        assert await note_store.list_notes() == []
        assert await note_store.count_notes() == 0
