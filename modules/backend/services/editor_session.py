"""
Editor Session.

In-memory state of the one note currently open for editing: the live
title/body buffers, the snapshot they are compared against, and the
policy applied when the session ends.

A session is opened in EDIT mode (bound to an existing note) or INSERT
mode (bound to a freshly inserted, empty note); the mode never changes.

Exit policy (commit_on_exit), evaluated in order:
    1. explicit discard  -> delete the note if it was inserted by this
                            session, never update
    2. explicit delete   -> delete the note
    3. both buffers empty -> delete the note (either mode)
    4. not dirty         -> no store call
    5. otherwise         -> derive the title if blank and update

Usage:
    editor = await EditorSession.open(store, EditorMode.EDIT, note_id)
    editor.set_body("new text")
    pending = editor.request_exit()
    if pending is None:
        outcome = await editor.commit_on_exit()
    else:
        outcome = await editor.resolve(Choice.SAVE)
"""

from modules.backend.core.exceptions import StorageUnavailableError, ValidationError
from modules.backend.core.logging import get_logger, log_with_source
from modules.backend.schemas.note import NoteResponse, NoteUpdate
from modules.backend.schemas.session import (
    Choice,
    ConfirmationKind,
    EditorMode,
    EditorState,
    ExitOutcome,
    ExitReason,
    PendingConfirmation,
)
from modules.backend.services.note import NoteService
from modules.backend.services.title import TitleRule

logger = get_logger(__name__)

_CHOICE_REASONS = {
    Choice.SAVE: ExitReason.SAVE,
    Choice.DISCARD: ExitReason.DISCARD,
    Choice.DELETE: ExitReason.DELETE,
}


class EditorSession:
    """
    One open note.

    Construct through ``open()``. Buffers are mutated with ``set_title`` /
    ``set_body``; the session ends with ``commit_on_exit``, ``save``,
    ``discard`` or by resolving the confirmation from ``request_exit``.
    A failed write leaves the session open so the user can retry.
    """

    def __init__(
        self,
        store: NoteService,
        mode: EditorMode,
        note: NoteResponse,
        title_rule: TitleRule,
        original_title: str,
        original_body: str,
    ) -> None:
        self._store = store
        self._mode = mode
        self._note = note
        self._title_rule = title_rule
        self._original_title = original_title
        self._original_body = original_body
        self._title = note.title
        self._body = note.body
        self._pending: PendingConfirmation | None = None
        self._closed = False

    @classmethod
    async def open(
        cls,
        store: NoteService,
        mode: EditorMode,
        note_id: str | None = None,
        title_rule: TitleRule | None = None,
        restore: EditorState | None = None,
    ) -> "EditorSession":
        """
        Open an editor session.

        Args:
            store: Note store the session reads from and commits to
            mode: EDIT to bind an existing note, INSERT to create one
            note_id: Note to edit (EDIT mode only)
            title_rule: Title derivation rule; notes.yaml when omitted
            restore: Previously exported state to resume from

        Returns:
            The open session

        Raises:
            ValidationError: If mode and note_id do not agree
            NotFoundError: If the note to edit does not exist
            StorageUnavailableError: If the new note could not be inserted
        """
        mode = EditorMode(mode)
        rule = title_rule or TitleRule.from_config()

        if restore is not None:
            return await cls._reopen(store, restore, rule)

        if mode is EditorMode.EDIT:
            if not note_id:
                raise ValidationError("Editing requires a note id")
            note = await store.get_note(note_id)
        else:
            if note_id:
                raise ValidationError("A new note cannot be bound to an existing id")
            note = await store.insert_note()

        log_with_source(logger, "editor", "debug", "Editor opened", note_id=note.id, mode=mode.value)
        return cls(store, mode, note, rule, note.title, note.body)

    @classmethod
    async def _reopen(
        cls,
        store: NoteService,
        state: EditorState,
        rule: TitleRule,
    ) -> "EditorSession":
        note = await store.get_note(state.note_id)
        session = cls(store, state.mode, note, rule, state.original_title, state.original_body)
        session._title = state.title
        session._body = state.body
        log_with_source(logger, "editor", "debug", "Editor restored", note_id=note.id, mode=state.mode.value)
        return session

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def note_id(self) -> str:
        return self._note.id

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def note(self) -> NoteResponse:
        """Last record read from or written to the store."""
        return self._note

    @property
    def title(self) -> str:
        return self._title

    @property
    def body(self) -> str:
        return self._body

    @property
    def original_title(self) -> str:
        return self._original_title

    @property
    def original_body(self) -> str:
        return self._original_body

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    def set_title(self, title: str) -> None:
        self._ensure_open()
        self._title = title

    def set_body(self, body: str) -> None:
        self._ensure_open()
        self._body = body

    def is_dirty(self) -> bool:
        """True iff the live buffers differ from the snapshot."""
        return self._title != self._original_title or self._body != self._original_body

    def is_empty(self) -> bool:
        """True iff both live buffers are empty."""
        return not self._title and not self._body

    def export_state(self) -> EditorState:
        """Freeze the session so it can be reopened with ``open(restore=...)``."""
        return EditorState(
            note_id=self.note_id,
            mode=self._mode,
            original_title=self._original_title,
            original_body=self._original_body,
            title=self._title,
            body=self._body,
        )

    async def reload(self) -> NoteResponse:
        """
        Re-read the bound note and replace the live buffers with it.

        The snapshot is kept, so edits persisted elsewhere since open still
        count as changes.

        Raises:
            NotFoundError: If the note has been deleted
        """
        self._ensure_open()
        self._note = await self._store.get_note(self.note_id)
        self._title = self._note.title
        self._body = self._note.body
        return self._note

    # -------------------------------------------------------------------------
    # Exit
    # -------------------------------------------------------------------------

    def request_exit(self) -> PendingConfirmation | None:
        """
        Gate a "navigate away" exit.

        Returns:
            None when nothing changed (the host may exit right away with
            ``commit_on_exit()``), otherwise the confirmation to show.
        """
        self._ensure_open()
        if not self.is_dirty():
            self._pending = None
            return None

        if self._mode is EditorMode.EDIT and self.is_empty():
            kind = ConfirmationKind.DELETE_OR_DISCARD
        else:
            kind = ConfirmationKind.SAVE_OR_DISCARD
        self._pending = PendingConfirmation.of(kind, self.note_id)
        return self._pending

    async def resolve(self, choice: Choice) -> ExitOutcome:
        """
        Answer the pending exit confirmation and end the session.

        Raises:
            ValidationError: If nothing is pending or the choice is not offered
        """
        self._ensure_open()
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
        return await self.commit_on_exit(_CHOICE_REASONS[choice])

    async def save(self) -> ExitOutcome:
        """Explicit save action."""
        return await self.commit_on_exit(ExitReason.SAVE)

    async def discard(self) -> ExitOutcome:
        """Explicit discard action."""
        return await self.commit_on_exit(ExitReason.DISCARD)

    async def commit_on_exit(self, reason: ExitReason = ExitReason.NAVIGATE) -> ExitOutcome:
        """
        Apply the exit policy and close the session.

        Storage failures are logged and reported as FAILED; the session then
        stays open with its buffers intact.

        Raises:
            ValidationError: If the session is already closed
        """
        self._ensure_open()
        reason = ExitReason(reason)

        try:
            outcome = await self._apply_exit_policy(reason)
        except StorageUnavailableError as e:
            log_with_source(
                logger, "editor", "error", "Editor commit failed",
                note_id=self.note_id, reason=reason.value, error=e.message,
            )
            return ExitOutcome.FAILED

        self._closed = True
        self._pending = None
        log_with_source(
            logger, "editor", "info", "Editor closed",
            note_id=self.note_id, mode=self._mode.value,
            reason=reason.value, outcome=outcome.value,
        )
        return outcome

    async def _apply_exit_policy(self, reason: ExitReason) -> ExitOutcome:
        if reason is ExitReason.DISCARD:
            if self._mode is EditorMode.INSERT:
                await self._store.delete_note(self.note_id)
            return ExitOutcome.DISCARDED

        if reason is ExitReason.DELETE:
            await self._store.delete_note(self.note_id)
            return ExitOutcome.DELETED

        if self.is_empty():
            await self._store.delete_note(self.note_id)
            return ExitOutcome.CANCELED

        if not self.is_dirty():
            return ExitOutcome.UNCHANGED

        title = self._title_rule.apply(self._title, self._body)
        saved = await self._store.update_note(
            self.note_id,
            NoteUpdate(title=title, body=self._body),
        )
        if saved is None:
            return ExitOutcome.VANISHED

        self._note = saved
        self._title = self._original_title = saved.title
        self._body = self._original_body = saved.body
        return ExitOutcome.SAVED

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValidationError("Editor session is closed", details={"note_id": self.note_id})
