"""Request/response models for note endpoints.

Notes go over the wire with camelCase keys (`isPinned`, `createdAt`, ...) and
the owning user's id as `owner`.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from noteshelf.models.note import Note


class NoteView(BaseModel):
    """Wire representation of a note."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    owner: str
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    is_pinned: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_note(cls, note: Note) -> "NoteView":
        return cls(
            id=note.id,
            owner=note.user_id,
            title=note.title,
            content=note.content,
            tags=note.tags,
            is_pinned=note.is_pinned,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteResponse(BaseModel):
    """Response for a single note."""
    message: str
    note: NoteView


class NotesListResponse(BaseModel):
    """Response for the note list."""
    message: str
    notes: List[NoteView]
