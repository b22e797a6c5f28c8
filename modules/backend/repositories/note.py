"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.utils import next_timestamp, utc_now
from modules.backend.models.note import Note
from modules.backend.repositories.base import BaseRepository
from modules.backend.schemas.note import SortOrder

_ORDERINGS = {
    SortOrder.MODIFIED_DESC: (Note.modified_at.desc(), Note.id),
    SortOrder.MODIFIED_ASC: (Note.modified_at.asc(), Note.id),
    SortOrder.TITLE_ASC: (func.lower(Note.title).asc(), Note.modified_at.desc()),
}


def _title_filter(query: str):
    """Case-insensitive substring match on title, LIKE wildcards escaped."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return Note.title.ilike(f"%{escaped}%", escape="\\")


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def insert_blank(self) -> Note:
        """Create a note with empty title and body, stamped now."""
        now = utc_now()
        return await self.create(title="", body="", created_at=now, modified_at=now)

    async def list_sorted(
        self,
        sort_order: SortOrder = SortOrder.MODIFIED_DESC,
        query: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Note]:
        """
        Get notes in the requested order.

        Args:
            sort_order: Ordering of the result
            query: Optional case-insensitive title substring
            limit: Maximum number of notes to return
            offset: Number of notes to skip

        Returns:
            List of notes
        """
        stmt = select(Note).order_by(*_ORDERINGS[SortOrder(sort_order)])
        if query:
            stmt = stmt.where(_title_filter(query))
        result = await self.session.execute(stmt.limit(limit).offset(offset))
        return list(result.scalars().all())

    async def count_matching(self, query: str | None = None) -> int:
        """Count notes, optionally restricted to a title substring."""
        stmt = select(func.count()).select_from(Note)
        if query:
            stmt = stmt.where(_title_filter(query))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def update_content(
        self,
        id: str,
        title: str | None = None,
        body: str | None = None,
    ) -> Note | None:
        """
        Write title and/or body and stamp modified_at.

        modified_at always moves forward, even when neither field is given.

        Args:
            id: Note ID to update
            title: New title, or None to keep the current one
            body: New body, or None to keep the current one

        Returns:
            Updated note, or None if the note no longer exists
        """
        note = await self.get_by_id_or_none(id)
        if note is None:
            return None

        if title is not None:
            note.title = title
        if body is not None:
            note.body = body
        note.modified_at = next_timestamp(note.modified_at)

        await self.session.flush()
        await self.session.refresh(note)
        return note
