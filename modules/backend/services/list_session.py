"""
List Session.

The note list: runs the store's list query on demand, turns selections
into entry requests for the host, and gates deletion behind a
confirmation. Nothing is cached between refreshes; ``entries`` is only
the result of the last ``refresh()``.
"""

from modules.backend.core.exceptions import ValidationError
from modules.backend.core.logging import get_logger, log_with_source
from modules.backend.schemas.note import NoteSummary, SortOrder
from modules.backend.schemas.session import (
    Choice,
    ConfirmationKind,
    EntryAction,
    EntryRequest,
    ListQuery,
    PendingConfirmation,
)
from modules.backend.services.editor_session import EditorSession
from modules.backend.services.note import NoteService
from modules.backend.services.title import TitleRule

logger = get_logger(__name__)


class ListSession:
    """
    Browse (or pick from) the notes in the store.

    In pick mode, selecting a note hands its id back to the caller
    instead of opening it.
    """

    def __init__(
        self,
        store: NoteService,
        query: ListQuery | None = None,
        pick: bool = False,
    ) -> None:
        self._store = store
        self._query = query or ListQuery()
        self._pick = pick
        self._entries: list[NoteSummary] = []
        self._total = 0
        self._pending: PendingConfirmation | None = None

    @classmethod
    def from_config(
        cls,
        store: NoteService,
        sort_order: SortOrder | None = None,
        search: str | None = None,
        limit: int | None = None,
        pick: bool = False,
    ) -> "ListSession":
        """Build a list session using notes.yaml defaults for anything not given."""
        from modules.backend.core.config import get_app_config

        notes = get_app_config().notes
        query = ListQuery(
            sort_order=sort_order or SortOrder(notes.default_sort),
            search=search,
            limit=limit or notes.list_limit,
        )
        return cls(store, query=query, pick=pick)

    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def entries(self) -> list[NoteSummary]:
        """Summaries from the last refresh, in query order."""
        return list(self._entries)

    @property
    def total(self) -> int:
        """Number of notes matching the query at the last refresh."""
        return self._total

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._pending

    @property
    def pick_mode(self) -> bool:
        return self._pick

    async def refresh(self) -> list[NoteSummary]:
        """Re-run the list query against the store."""
        q = self._query
        self._entries = await self._store.list_notes(
            sort_order=q.sort_order,
            query=q.search,
            limit=q.limit,
            offset=q.offset,
        )
        self._total = await self._store.count_notes(q.search)
        log_with_source(logger, "list", "debug", "List refreshed", count=len(self._entries), total=self._total)
        return self.entries

    def select(self, note_id: str) -> EntryRequest:
        """Turn a selected row into the request the host acts on."""
        if not note_id:
            raise ValidationError("A note id is required")
        action = EntryAction.PICK if self._pick else EntryAction.VIEW_EXISTING
        return EntryRequest(action=action, note_id=note_id)

    def create_new(self) -> EntryRequest:
        """Request a new note; the insert happens when the editor opens."""
        return EntryRequest(action=EntryAction.CREATE_NEW)

    async def open_editor(
        self,
        request: EntryRequest,
        title_rule: TitleRule | None = None,
    ) -> EditorSession:
        """
        Open the editor session an entry request asks for.

        Raises:
            ValidationError: For PICK requests, which never open an editor
        """
        mode = request.editor_mode
        if mode is None:
            raise ValidationError(
                "Entry action does not open an editor",
                details={"action": request.action.value},
            )
        return await EditorSession.open(self._store, mode, request.note_id, title_rule=title_rule)

    def request_delete(self, note_id: str) -> PendingConfirmation:
        """Ask for confirmation before deleting ``note_id``."""
        if not note_id:
            raise ValidationError("A note id is required")
        self._pending = PendingConfirmation.of(ConfirmationKind.CONFIRM_DELETE, note_id)
        return self._pending

    async def resolve(self, choice: Choice) -> bool:
        """
        Answer the pending delete confirmation.

        Returns:
            True if a note was deleted

        Raises:
            ValidationError: If nothing is pending or the choice is not offered
        """
        choice = Choice(choice)
        pending = self._pending
        if pending is None:
            raise ValidationError("No confirmation is pending")
        if not pending.allows(choice):
            raise ValidationError(
                "Choice not offered",
                details={"kind": pending.kind.value, "choice": choice.value},
            )

        self._pending = None
        if choice is not Choice.DELETE:
            return False

        removed = await self._store.delete_note(pending.note_id)
        log_with_source(logger, "list", "info", "Note deleted from list", note_id=pending.note_id, removed=removed)
        await self.refresh()
        return removed
