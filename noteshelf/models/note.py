"""Note data models for noteshelf."""

from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StringConstraints, field_validator

from noteshelf.models.constants import (
    MAX_CONTENT_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TITLE_LENGTH,
)

Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=MAX_TAG_LENGTH)]


class Note(BaseModel):
    """Canonical Note model."""

    id: str = Field(..., description="Unique note identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this note")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")
    tags: List[str] = Field(default_factory=list, description="Ordered list of tags")
    is_pinned: bool = Field(False, description="Whether the note is pinned to the top of the list")
    created_at: datetime = Field(..., description="Note creation timestamp")
    updated_at: datetime = Field(..., description="Note last update timestamp")


class NoteInput(BaseModel):
    """Mutable note fields as accepted from a client.

    Used for both create and update (update replaces every field). There is no
    owner field: ownership always comes from the authenticated caller.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
    tags: Optional[List[Tag]] = Field(None, description="Optional tags, defaults to []")
    is_pinned: Optional[StrictBool] = Field(None, alias="isPinned", description="Defaults to false")

    @field_validator("title", "content", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    def resolved_tags(self) -> List[str]:
        return list(self.tags or [])

    def resolved_is_pinned(self) -> bool:
        return bool(self.is_pinned)
