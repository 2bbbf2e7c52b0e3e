"""
Notes API Endpoints.

REST API endpoints for note management.

Write endpoints read the request body as raw JSON and validate it
themselves, so that an unknown note id is reported before anything
about the payload, and a blank ``note`` wrapper is told apart from one
carrying only unknown keys.
"""

from typing import Any, TypeVar

from fastapi import APIRouter, Body, Query, Request, Response
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from modules.backend.core.dependencies import DbSession, NoteRepo
from modules.backend.core.exception_handlers import error_messages_by_field
from modules.backend.core.exceptions import MissingParameterError, ValidationError
from modules.backend.core.logging import get_logger
from modules.backend.schemas.note import (
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
)
from modules.backend.services.note import (
    NoteCreateService,
    NoteResult,
    NoteUpdateService,
)

router = APIRouter()
logger = get_logger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)

NOTE_BODY_EXAMPLES = [
    {"note": {"title": "Groceries", "body": "Milk, eggs, coffee", "archived": False}},
]


def _is_blank(value: Any) -> bool:
    """True for a missing, null, false, empty or whitespace-only parameter."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list)):
        return not value
    return False


def _parse_payload(schema: type[RequestT], payload: Any) -> RequestT:
    """
    Require a non-blank ``note`` parameter and validate the body.

    Raises:
        MissingParameterError: If ``note`` is absent or blank
        ValidationError: If a note field has the wrong type
    """
    if not isinstance(payload, dict) or _is_blank(payload.get("note")):
        raise MissingParameterError()

    try:
        return schema.model_validate(payload)
    except PayloadValidationError as e:
        raise ValidationError(details=error_messages_by_field(e.errors())) from e


def _render(result: NoteResult) -> NoteResponse:
    """Return the saved note, or raise its field errors as a 422."""
    if not result.success:
        raise ValidationError(details=result.errors)
    return NoteResponse.model_validate(result.note)


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description=(
        "List active notes, or archived notes with archived=true. "
        "Any other archived value lists active notes."
    ),
)
async def list_notes(
    repo: NoteRepo,
    archived: str | None = Query(
        default=None,
        description="'true' for archived notes; anything else for active notes",
    ),
) -> list[NoteResponse]:
    """List notes filtered by archived status."""
    notes = await repo.list_by_archived_status(archived)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(note_id: str, repo: NoteRepo) -> NoteResponse:
    """Get a note by ID."""
    note = await repo.get_by_id(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a note from {\"note\": {title, body, archived}}.",
)
async def create_note(
    request: Request,
    response: Response,
    db: DbSession,
    payload: Any = Body(default=None, examples=NOTE_BODY_EXAMPLES),
) -> NoteResponse:
    """Create a new note."""
    data = _parse_payload(NoteCreateRequest, payload)

    note = _render(await NoteCreateService(db).call(data.note))
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return note


@router.api_route(
    "/{note_id}",
    methods=["PATCH", "PUT"],
    response_model=NoteResponse,
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    db: DbSession,
    repo: NoteRepo,
    payload: Any = Body(default=None, examples=NOTE_BODY_EXAMPLES),
) -> NoteResponse:
    """Update a note."""
    note = await repo.get_by_id(note_id)
    data = _parse_payload(NoteUpdateRequest, payload)

    return _render(await NoteUpdateService(db).call(note, data.note))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(note_id: str, repo: NoteRepo) -> Response:
    """Delete a note."""
    await repo.delete(note_id)
    logger.info("Note deleted", extra={"note_id": note_id})
    return Response(status_code=204)
