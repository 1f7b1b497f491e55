"""SQLAlchemy database models for noteshelf."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, ForeignKey, Index

from noteshelf.database.database import Base


class UserDB(Base):
    """Database model for User.

    `password_hash` never leaves the repository layer; `to_pydantic()` drops it.
    """

    __tablename__ = "users"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User profile
    name = Column(String(50), nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)

    # Credentials (bcrypt hash, never plaintext)
    password_hash = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model (without the password hash)."""
        from noteshelf.models.user import User
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class NoteDB(Base):
    """Database model for Note."""

    __tablename__ = "notes"
    __table_args__ = (
        # Serves the list ordering: owner, pinned first, newest first.
        Index("ix_notes_user_pinned_created", "user_id", "is_pinned", "created_at"),
    )

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Owner (set once at creation)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Body
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)

    # Tags (stored as JSON array)
    tags = Column(JSON, nullable=False, default=list)

    # Flags
    is_pinned = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from noteshelf.models.note import Note
        return Note(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            content=self.content,
            tags=list(self.tags or []),
            is_pinned=bool(self.is_pinned),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
