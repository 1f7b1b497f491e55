"""User data models for noteshelf."""

from datetime import datetime
from pydantic import BaseModel, Field


class User(BaseModel):
    """User model for noteshelf. Never carries the password hash."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    name: str = Field(..., description="User display name")
    email: str = Field(..., description="Normalized (trimmed, lower-cased) email address")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")


class UserCredentials(BaseModel):
    """A user together with the stored password hash, for login verification only."""

    user: User
    password_hash: str


class AuthContext(BaseModel):
    """Identity resolved from a verified bearer token for the current request."""

    user_id: str = Field(..., description="Authenticated user ID")
    user: User = Field(..., description="Live user record the token resolved to")
