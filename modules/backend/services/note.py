"""
Note Services.

Business logic for writing notes. Each service extracts the allow-listed
fields, validates the resulting note, and persists it only when valid.

Both services return a NoteResult instead of raising on validation
failure, so callers decide how to present the field errors.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.note import Note
from modules.backend.repositories.note import NoteRepository
from modules.backend.schemas.note import NoteCreateInput, NoteUpdateInput
from modules.backend.services.base import BaseService

REQUIRED_FIELDS = ("title",)

NOTE_DEFAULTS: dict[str, Any] = {
    "title": "",
    "body": "",
    "archived": False,
}


@dataclass
class NoteResult:
    """Outcome of a create or update: the saved note, or field errors."""

    success: bool
    note: Note | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def ok(cls, note: Note) -> "NoteResult":
        return cls(success=True, note=note)

    @classmethod
    def failed(cls, errors: dict[str, list[str]]) -> "NoteResult":
        return cls(success=False, errors=errors)


def submitted_fields(data: NoteCreateInput | NoteUpdateInput) -> dict[str, Any]:
    """
    Return the fields the client actually sent.

    An explicit null for ``body`` or ``archived`` counts as not sent.
    A null ``title`` is kept so that validation reports it as blank.
    """
    sent = data.model_dump(exclude_unset=True)
    return {
        name: value
        for name, value in sent.items()
        if value is not None or name in REQUIRED_FIELDS
    }


class NoteCreateService(BaseService):
    """Creates a note from allow-listed fields, applying entity defaults."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def call(self, data: NoteCreateInput) -> NoteResult:
        candidate = {**NOTE_DEFAULTS, **submitted_fields(data)}

        errors = self._validate_required(candidate, REQUIRED_FIELDS)
        if errors:
            self._log_debug("Note rejected", errors=errors)
            return NoteResult.failed(errors)

        self._log_operation("Creating note", title=candidate["title"])

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(**candidate),
        )

        self._log_debug("Note created", note_id=note.id)
        return NoteResult.ok(note)


class NoteUpdateService(BaseService):
    """
    Applies a partial update to an already loaded note.

    Changes are merged into a draft and validated there first, so a
    rejected update leaves both the stored row and the loaded instance
    untouched.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def call(self, note: Note, data: NoteUpdateInput) -> NoteResult:
        changes = submitted_fields(data)
        if not changes:
            return NoteResult.ok(note)

        draft = {
            "title": note.title,
            "body": note.body,
            "archived": note.archived,
            **changes,
        }
        errors = self._validate_required(draft, REQUIRED_FIELDS)
        if errors:
            self._log_debug("Note update rejected", note_id=note.id, errors=errors)
            return NoteResult.failed(errors)

        self._log_operation(
            "Updating note",
            note_id=note.id,
            fields=list(changes.keys()),
        )

        updated = await self._execute_db_operation(
            "update_note",
            self.repo.update(note.id, **changes),
        )
        return NoteResult.ok(updated)
