# Pydantic schemas package
from modules.backend.schemas.note import (
    NoteResponse,
    NoteSummary,
    NoteUpdate,
    SortOrder,
)

__all__ = [
    "NoteResponse",
    "NoteSummary",
    "NoteUpdate",
    "SortOrder",
]
