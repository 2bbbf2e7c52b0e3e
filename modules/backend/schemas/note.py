"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Request bodies wrap the note fields in a ``note`` key:

    {"note": {"title": "...", "body": "...", "archived": false}}

Only ``title``, ``body`` and ``archived`` are accepted; any other key,
inside ``note`` or next to it, is dropped without error.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _NoteFields(BaseModel):
    """Allow-listed writable note fields. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(
        default=None,
        description="Note title; must contain a non-whitespace character",
        examples=["Groceries"],
    )
    body: str | None = Field(
        default=None,
        description="Note text",
        examples=["Milk, eggs, coffee"],
    )
    archived: bool | None = Field(
        default=None,
        description="Archive status",
    )


class NoteCreateInput(_NoteFields):
    """Fields for creating a note. Absent fields take entity defaults."""


class NoteUpdateInput(_NoteFields):
    """Fields for updating a note. Only fields present in the request change."""


class NoteCreateRequest(BaseModel):
    """Request body for POST /notes."""

    model_config = ConfigDict(extra="ignore")

    note: NoteCreateInput | None = None


class NoteUpdateRequest(BaseModel):
    """Request body for PATCH/PUT /notes/{note_id}."""

    model_config = ConfigDict(extra="ignore")

    note: NoteUpdateInput | None = None


class NoteResponse(BaseModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    body: str = Field(description="Note text")
    archived: bool = Field(description="Whether the note is archived")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
