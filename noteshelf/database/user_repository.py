"""Repository for User database operations."""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from noteshelf.errors import DuplicateEmailError
from noteshelf.models.user import User, UserCredentials
from noteshelf.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations.

    Emails are expected already normalized (trimmed, lower-cased) by the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.to_pydantic() if user_db else None

    def get_credentials(self, email: str) -> Optional[UserCredentials]:
        """Get user and stored password hash by email (login only)."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        if not user_db:
            return None
        return UserCredentials(user=user_db.to_pydantic(), password_hash=user_db.password_hash)

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Create a new user.

        Raises:
            DuplicateEmailError: If the email unique constraint rejects the insert
        """
        user_db = UserDB(name=name, email=email, password_hash=password_hash)
        try:
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}")
            return user_db.to_pydantic()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Rejected duplicate user insert: {type(e).__name__}")
            raise DuplicateEmailError() from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user: {type(e).__name__}: {str(e)}")
            raise
