"""Ownership-scoped note operations.

Every method takes the caller's user ID and passes it to the repository as
part of the lookup predicate. Missing notes and other users' notes both raise
NoteNotFoundError with the same message.
"""

from typing import List
from sqlalchemy.orm import Session

from noteshelf.database.note_repository import NoteRepository
from noteshelf.errors import NoteNotFoundError
from noteshelf.models.note import Note, NoteInput


class NotesService:
    """CRUD over the caller's own notes."""

    def __init__(self, db: Session):
        self.notes = NoteRepository(db)

    def list(self, caller: str) -> List[Note]:
        return self.notes.get_all(caller)

    def create(self, caller: str, data: NoteInput) -> Note:
        return self.notes.create(
            user_id=caller,
            title=data.title,
            content=data.content,
            tags=data.resolved_tags(),
            is_pinned=data.resolved_is_pinned(),
        )

    def get(self, caller: str, note_id: str) -> Note:
        note = self.notes.get(caller, note_id)
        if note is None:
            raise NoteNotFoundError()
        return note

    def update(self, caller: str, note_id: str, data: NoteInput) -> Note:
        """Replace title, content, tags and pin state; omitted tags/isPinned reset to defaults."""
        note = self.notes.update(
            user_id=caller,
            note_id=note_id,
            title=data.title,
            content=data.content,
            tags=data.resolved_tags(),
            is_pinned=data.resolved_is_pinned(),
        )
        if note is None:
            raise NoteNotFoundError()
        return note

    def delete(self, caller: str, note_id: str) -> None:
        if not self.notes.delete(caller, note_id):
            raise NoteNotFoundError()
