"""Repository for Note database operations.

Every lookup takes the owner's user_id and filters on it in the same query as
the note id. A note owned by someone else is therefore indistinguishable from
a note that does not exist: both come back as None / False.
"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from noteshelf.models.note import Note
from noteshelf.database.models import NoteDB

logger = logging.getLogger(__name__)


class NoteRepository:
    """Repository for Note database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, user_id: str, note_id: str) -> Optional[NoteDB]:
        return self.db.query(NoteDB).filter(
            NoteDB.id == note_id,
            NoteDB.user_id == user_id,
        ).first()

    def create(
        self,
        user_id: str,
        title: str,
        content: str,
        tags: List[str],
        is_pinned: bool,
    ) -> Note:
        """Create a new note owned by user_id."""
        now = datetime.utcnow()
        note_db = NoteDB(
            user_id=user_id,
            title=title,
            content=content,
            tags=list(tags),
            is_pinned=is_pinned,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(note_db)
            self.db.commit()
            self.db.refresh(note_db)
            logger.debug(f"Created note {note_db.id} for user {user_id}")
            return note_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create note for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, user_id: str, note_id: str) -> Optional[Note]:
        """Get note by ID for a specific user."""
        note_db = self._owned(user_id, note_id)
        return note_db.to_pydantic() if note_db else None

    def get_all(self, user_id: str) -> List[Note]:
        """Get all notes for a user, pinned first, then newest first."""
        notes_db = self.db.query(NoteDB).filter(
            NoteDB.user_id == user_id,
        ).order_by(desc(NoteDB.is_pinned), desc(NoteDB.created_at)).all()
        return [note_db.to_pydantic() for note_db in notes_db]

    def update(
        self,
        user_id: str,
        note_id: str,
        title: str,
        content: str,
        tags: List[str],
        is_pinned: bool,
    ) -> Optional[Note]:
        """Replace the mutable fields of a note owned by user_id.

        Returns None if no such note exists for this user. The owner is never changed.
        """
        note_db = self._owned(user_id, note_id)
        if not note_db:
            return None

        note_db.title = title
        note_db.content = content
        note_db.tags = list(tags)
        note_db.is_pinned = is_pinned
        note_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(note_db)
            logger.debug(f"Updated note {note_id} for user {user_id}")
            return note_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update note {note_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: str, note_id: str) -> bool:
        """Permanently delete a note by ID for a specific user."""
        note_db = self._owned(user_id, note_id)
        if not note_db:
            return False

        try:
            self.db.delete(note_db)
            self.db.commit()
            logger.debug(f"Deleted note {note_id} for user {user_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete note {note_id}: {type(e).__name__}: {str(e)}")
            raise
