"""
Note Service.

The note store: business logic layer over NoteRepository. Every mutation
is committed before the method returns, so any later read through any
session on the same database observes it.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.repositories.note import NoteRepository
from modules.backend.schemas.note import NoteResponse, NoteSummary, NoteUpdate, SortOrder
from modules.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note storage.

    Handles note insertion, retrieval, listing, updates and deletion.
    Returns detached pydantic snapshots rather than ORM instances.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def insert_note(self) -> NoteResponse:
        """
        Create a new, empty note.

        Returns:
            Created note

        Raises:
            StorageUnavailableError: If the note could not be written
        """
        note = await self._execute_db_operation("insert_note", self.repo.insert_blank())
        snapshot = NoteResponse.model_validate(note)
        await self._commit("insert_note")

        self._log_operation("Note inserted", note_id=snapshot.id)
        return snapshot

    async def get_note(self, note_id: str) -> NoteResponse:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
            StorageUnavailableError: If the store cannot be read
        """
        note = await self._execute_db_operation("get_note", self.repo.get_by_id(note_id))
        return NoteResponse.model_validate(note)

    async def list_notes(
        self,
        sort_order: SortOrder = SortOrder.MODIFIED_DESC,
        query: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[NoteSummary]:
        """
        List note summaries.

        Args:
            sort_order: Ordering, most recently modified first by default
            query: Optional case-insensitive title filter
            limit: Maximum number of notes
            offset: Number to skip for pagination

        Returns:
            List of summaries (id, title, modified_at)
        """
        notes = await self._execute_db_operation(
            "list_notes",
            self.repo.list_sorted(sort_order, query=query, limit=limit, offset=offset),
        )
        return [NoteSummary.model_validate(note) for note in notes]

    async def count_notes(self, query: str | None = None) -> int:
        """Count notes, optionally filtered by title."""
        return await self._execute_db_operation(
            "count_notes",
            self.repo.count_matching(query),
        )

    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteResponse | None:
        """
        Update an existing note.

        Only fields set on ``data`` are written; modified_at is always
        refreshed. A note deleted in the meantime is not an error.

        Args:
            note_id: Note ID to update
            data: Update data

        Returns:
            Updated note, or None if the note no longer exists

        Raises:
            StorageUnavailableError: If the update could not be written
        """
        update_data = data.model_dump(exclude_unset=True)

        note = await self._execute_db_operation(
            "update_note",
            self.repo.update_content(note_id, **update_data),
        )
        if note is None:
            self._logger.warning(
                "Update skipped, note no longer exists",
                extra={"note_id": note_id},
            )
            return None

        snapshot = NoteResponse.model_validate(note)
        await self._commit("update_note")
        self._log_operation(
            "Note updated",
            note_id=note_id,
            fields=list(update_data.keys()),
        )
        return snapshot

    async def delete_note(self, note_id: str) -> bool:
        """
        Delete a note. Idempotent.

        Args:
            note_id: Note ID to delete

        Returns:
            True if the note existed and was removed

        Raises:
            StorageUnavailableError: If the delete could not be written
        """
        removed = await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )
        await self._commit("delete_note")

        if removed:
            self._log_operation("Note deleted", note_id=note_id)
        else:
            self._log_debug("Delete skipped, note already gone", note_id=note_id)
        return removed
