"""Idempotent default-user seeding for local development.

Called explicitly by the application startup when SEED_DEFAULT_USER=true.
Nothing in the auth or notes flow depends on the seeded user.
"""

import logging
from sqlalchemy.orm import Session

from noteshelf.auth.passwords import hash_password
from noteshelf.database.user_repository import UserRepository
from noteshelf.errors import DuplicateEmailError

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "Test User"
DEFAULT_USER_EMAIL = "test@example.com"
DEFAULT_USER_PASSWORD = "password123"


def seed_default_user(db: Session) -> bool:
    """Create the default user if it does not exist yet.

    Returns:
        True if the user was created, False if it already existed
    """
    users = UserRepository(db)
    if users.get_by_email(DEFAULT_USER_EMAIL) is not None:
        logger.info(f"Default user {DEFAULT_USER_EMAIL} already exists")
        return False

    try:
        users.create(
            name=DEFAULT_USER_NAME,
            email=DEFAULT_USER_EMAIL,
            password_hash=hash_password(DEFAULT_USER_PASSWORD),
        )
    except DuplicateEmailError:
        # Another process seeded it between the lookup and the insert.
        return False

    logger.info(f"Seeded default user {DEFAULT_USER_EMAIL}")
    return True
