"""
Note Model.

Database model for notes, the single persisted entity.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, TimestampMixin, UUIDMixin


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    A note has a title and a body, both possibly empty. The id is a
    random UUID assigned at insert and never reused; modified_at is
    maintained by the repository on every write.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    body: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
