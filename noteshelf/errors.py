"""Domain errors for noteshelf.

Every failure a caller can observe is one of these classes. Each carries the
exact user-facing message; the HTTP status for each is assigned in
`noteshelf.api.errors`. Anything that is not a `NoteshelfError` is an
internal error and is reported generically.
"""

from typing import Dict, List, Optional


class NoteshelfError(Exception):
    """Base class for all user-facing noteshelf errors."""

    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationFailedError(NoteshelfError):
    """Raised when input violates one or more field constraints.

    `errors` lists every violated field, not just the first.
    """

    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__()
        self.errors = errors


class DuplicateEmailError(NoteshelfError):
    """Raised on registration when the normalized email is already taken."""

    message = "User already exists with this email"


class InvalidCredentialsError(NoteshelfError):
    """Raised on login for both unknown email and wrong password."""

    message = "Invalid credentials"


class NoTokenError(NoteshelfError):
    """Raised when a protected route is called without a bearer token."""

    message = "Access denied. No token provided."


class InvalidTokenError(NoteshelfError):
    """Raised for malformed, forged or expired tokens, and for tokens of deleted users."""

    message = "Invalid token."


class NoteNotFoundError(NoteshelfError):
    """Raised when a note does not exist or is owned by someone else."""

    message = "Note not found"
