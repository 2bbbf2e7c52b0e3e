"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.note import Note
from modules.backend.repositories.base import BaseRepository

ARCHIVED_FILTER_VALUE = "true"


def wants_archived(status: str | None) -> bool:
    """
    Interpret the ``archived`` query value.

    Only the exact string "true" selects archived notes. "false",
    a missing value and anything unrecognized all select active notes.
    """
    return status == ARCHIVED_FILTER_VALUE


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds archive-status queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_by_archived_status(self, status: str | None) -> list[Note]:
        """
        List notes matching an ``archived`` filter value.

        Args:
            status: Raw filter value from the request, possibly None

        Returns:
            Archived notes for "true", active notes otherwise
        """
        if wants_archived(status):
            return await self.get_archived()
        return await self.get_all_active()

    async def get_all_active(self) -> list[Note]:
        """Get all non-archived notes, oldest first."""
        result = await self.session.execute(
            select(Note)
            .where(Note.archived == False)  # noqa: E712
            .order_by(Note.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_archived(self) -> list[Note]:
        """Get all archived notes, oldest first."""
        result = await self.session.execute(
            select(Note)
            .where(Note.archived == True)  # noqa: E712
            .order_by(Note.created_at.asc())
        )
        return list(result.scalars().all())
