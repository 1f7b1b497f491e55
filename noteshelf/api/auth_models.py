"""Request/response models for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from noteshelf.models.constants import MAX_NAME_LENGTH, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from noteshelf.models.user import User


class RegisterRequest(BaseModel):
    """Request model for registration."""
    name: str = Field(..., min_length=MIN_NAME_LENGTH, max_length=MAX_NAME_LENGTH)
    email: EmailStr = Field(..., description="User email (trimmed and lower-cased)")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="Plaintext password, never stored")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _no_nul(cls, value):
        # bcrypt cannot hash NUL bytes.
        if "\x00" in value:
            raise PydanticCustomError("password_nul", "Password must not contain NUL characters")
        return value


class LoginRequest(BaseModel):
    """Request model for login."""
    email: EmailStr
    # Length rules apply at registration only.
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _present(cls, value):
        if not value:
            raise PydanticCustomError("password_required", "Password is required")
        return value


class UserView(BaseModel):
    """Public view of a user. Never includes the password hash."""
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(BaseModel):
    """Response model for register and login."""
    message: str
    token: str
    user: UserView
