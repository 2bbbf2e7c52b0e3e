"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.repositories.note import NoteRepository

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_note_repository(db: DbSession) -> NoteRepository:
    """Provide a note store bound to the request's session."""
    return NoteRepository(db)


NoteRepo = Annotated[NoteRepository, Depends(get_note_repository)]
