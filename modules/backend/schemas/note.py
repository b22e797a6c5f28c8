"""
Note Schemas.

Pydantic schemas for note store input/output validation.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOrder(str, Enum):
    """Orderings supported by the note list query."""

    MODIFIED_DESC = "modified_desc"
    MODIFIED_ASC = "modified_asc"
    TITLE_ASC = "title_asc"


class NoteUpdate(BaseModel):
    """
    Schema for a partial note update.

    Only fields explicitly set are written. modified_at is not accepted:
    the store always stamps it.
    """

    title: str | None = Field(
        default=None,
        description="Note title",
    )
    body: str | None = Field(
        default=None,
        description="Note body",
    )

    model_config = ConfigDict(extra="forbid")


class NoteResponse(BaseModel):
    """Full note record."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    body: str = Field(description="Note body")
    created_at: datetime = Field(description="Creation timestamp")
    modified_at: datetime = Field(description="Last modification timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteSummary(BaseModel):
    """Row of the note list projection."""

    id: str
    title: str
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)
