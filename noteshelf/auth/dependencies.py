"""FastAPI dependencies for authentication."""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from noteshelf.auth.jwt import get_user_id_from_token
from noteshelf.database.database import get_db
from noteshelf.database.user_repository import UserRepository
from noteshelf.errors import InvalidTokenError, NoTokenError
from noteshelf.models.user import AuthContext

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Resolve the bearer token to the live user making the request.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        AuthContext for the authenticated user

    Raises:
        NoTokenError: If no bearer token was sent
        InvalidTokenError: If the token is malformed, forged or expired, or its
            user no longer exists
    """
    if not credentials or not credentials.credentials:
        raise NoTokenError()

    user_id = get_user_id_from_token(credentials.credentials)
    if not user_id:
        raise InvalidTokenError()

    user = UserRepository(db).get(user_id)
    if not user:
        raise InvalidTokenError()

    return AuthContext(user_id=user.id, user=user)
