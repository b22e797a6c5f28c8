"""
Session Schemas.

Values exchanged between the note list / note editor sessions and the host
that drives them: entry requests, pending confirmations, exit outcomes and
the frozen editor state.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from modules.backend.schemas.note import SortOrder


class EditorMode(str, Enum):
    """How an editor session was opened. Fixed for the session's lifetime."""

    EDIT = "edit"
    INSERT = "insert"


class EntryAction(str, Enum):
    """External triggers that start (or short-circuit) an editor session."""

    VIEW_EXISTING = "view_existing"
    CREATE_NEW = "create_new"
    PICK = "pick"


class EntryRequest(BaseModel):
    """A request produced by the list session for the host to act on."""

    action: EntryAction
    note_id: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def editor_mode(self) -> EditorMode | None:
        """Editor mode this request opens, or None for PICK."""
        return _ACTION_MODES.get(self.action)


_ACTION_MODES = {
    EntryAction.VIEW_EXISTING: EditorMode.EDIT,
    EntryAction.CREATE_NEW: EditorMode.INSERT,
}


class ConfirmationKind(str, Enum):
    """Questions a session may put to the user before acting."""

    SAVE_OR_DISCARD = "save_or_discard"
    DELETE_OR_DISCARD = "delete_or_discard"
    CONFIRM_DELETE = "confirm_delete"


class Choice(str, Enum):
    """Answers to a pending confirmation."""

    SAVE = "save"
    DISCARD = "discard"
    DELETE = "delete"
    CANCEL = "cancel"


CONFIRMATION_CHOICES: dict[ConfirmationKind, tuple[Choice, ...]] = {
    ConfirmationKind.SAVE_OR_DISCARD: (Choice.SAVE, Choice.DISCARD),
    ConfirmationKind.DELETE_OR_DISCARD: (Choice.DELETE, Choice.DISCARD),
    ConfirmationKind.CONFIRM_DELETE: (Choice.DELETE, Choice.CANCEL),
}


class PendingConfirmation(BaseModel):
    """
    A question awaiting the user's answer.

    Owned by the session that raised it and resolved by calling that
    session's ``resolve(choice)`` with one of ``choices``.
    """

    kind: ConfirmationKind
    note_id: str
    choices: tuple[Choice, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, kind: ConfirmationKind, note_id: str) -> "PendingConfirmation":
        return cls(kind=kind, note_id=note_id, choices=CONFIRMATION_CHOICES[kind])

    def allows(self, choice: Choice) -> bool:
        return choice in self.choices


class ExitReason(str, Enum):
    """Why an editor session is ending."""

    NAVIGATE = "navigate"
    SAVE = "save"
    DISCARD = "discard"
    DELETE = "delete"


class ExitOutcome(str, Enum):
    """What committing an editor session did to the store."""

    SAVED = "saved"
    UNCHANGED = "unchanged"
    DISCARDED = "discarded"
    CANCELED = "canceled"
    DELETED = "deleted"
    VANISHED = "vanished"
    FAILED = "failed"


class EditorState(BaseModel):
    """Frozen editor state, enough to reopen the session where it left off."""

    note_id: str
    mode: EditorMode
    original_title: str = ""
    original_body: str = ""
    title: str = ""
    body: str = ""

    model_config = ConfigDict(extra="forbid")


class ListQuery(BaseModel):
    """Parameters of the list session's query."""

    sort_order: SortOrder = SortOrder.MODIFIED_DESC
    search: str | None = None
    limit: int = Field(default=50, ge=1)
    offset: int = Field(default=0, ge=0)
