"""Data models for noteshelf."""

from noteshelf.models.user import User, UserCredentials, AuthContext
from noteshelf.models.note import Note, NoteInput

__all__ = [
    "User",
    "UserCredentials",
    "AuthContext",
    "Note",
    "NoteInput",
]
