"""
Note Model.

Database model for notes, the single domain entity of the API.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, TimestampMixin, UUIDMixin


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    A titled piece of text with an archived flag. Archived notes are
    hidden from the default listing. A persisted note always has a
    non-blank title; that rule is enforced by the note services.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String,
        default="",
        nullable=False,
    )
    body: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, archived={self.archived})>"
