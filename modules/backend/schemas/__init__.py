# Pydantic schemas package
from modules.backend.schemas.note import (
    NoteCreateInput,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateInput,
    NoteUpdateRequest,
)

__all__ = [
    "NoteCreateInput",
    "NoteCreateRequest",
    "NoteResponse",
    "NoteUpdateInput",
    "NoteUpdateRequest",
]
