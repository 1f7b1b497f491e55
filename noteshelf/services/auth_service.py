"""Registration and login for noteshelf."""

import logging
from dataclasses import dataclass
from sqlalchemy.orm import Session

from noteshelf.auth.jwt import create_access_token
from noteshelf.auth.passwords import burn_verification, hash_password, verify_password
from noteshelf.database.user_repository import UserRepository
from noteshelf.errors import DuplicateEmailError, InvalidCredentialsError
from noteshelf.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email so lookups and the unique index agree."""
    return email.strip().lower()


@dataclass(frozen=True)
class AuthResult:
    """Token plus the user it was issued for."""
    token: str
    user: User


class AuthService:
    """Issues bearer tokens for new and returning users."""

    def __init__(self, db: Session):
        self.users = UserRepository(db)

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create a user and issue a token for it.

        Raises:
            DuplicateEmailError: If the normalized email is already registered,
                including when a concurrent registration wins the insert race
        """
        email = normalize_email(email)
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError()

        user = self.users.create(name=name.strip(), email=email, password_hash=hash_password(password))
        logger.info(f"Registered user {user.id}")
        return AuthResult(token=create_access_token(user.id), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a fresh token.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        creds = self.users.get_credentials(normalize_email(email))
        if creds is None:
            burn_verification(password)
            raise InvalidCredentialsError()

        if not verify_password(password, creds.password_hash):
            raise InvalidCredentialsError()

        logger.info(f"User {creds.user.id} logged in")
        return AuthResult(token=create_access_token(creds.user.id), user=creds.user)
