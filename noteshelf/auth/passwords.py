"""Password hashing helpers using passlib.

Provides the two functions used by registration and login:
- hash_password(plain: str) -> str
- verify_password(plain: str, hashed: str) -> bool

Uses bcrypt via passlib's CryptContext. Hashes are self-describing (scheme,
cost and salt are embedded), so verification needs only the plaintext and the
stored hash. The cost can be set with `BCRYPT_ROUNDS`; tests lower it, every
other environment should keep it at 10 or above.
"""

import logging
import os

from dotenv import load_dotenv
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

load_dotenv()

logger = logging.getLogger(__name__)

MIN_PRODUCTION_ROUNDS = 10

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


def check_rounds(rounds: int) -> bool:
    """Return True if the bcrypt cost is acceptable outside tests; warn otherwise."""
    if rounds < MIN_PRODUCTION_ROUNDS:
        logger.warning(
            f"BCRYPT_ROUNDS={rounds} is below {MIN_PRODUCTION_ROUNDS}; only use this in tests"
        )
        return False
    return True


check_rounds(BCRYPT_ROUNDS)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# Verified against for unknown emails, so that path costs one verify like the real one.
_DUMMY_HASH = pwd_context.hash("noteshelf-dummy-password")


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash in constant time.

    A plaintext bcrypt cannot hash (e.g. one containing NUL) can never match
    and returns False. A stored hash passlib cannot identify still raises
    ValueError: that is store corruption and must surface as an internal
    error, not as a failed login.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except PasswordValueError:
        return False


def burn_verification(plain: str) -> None:
    """Spend the same time a real verification would, for logins with an unknown email."""
    verify_password(plain, _DUMMY_HASH)
