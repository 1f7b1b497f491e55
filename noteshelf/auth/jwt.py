"""JWT token generation and validation for noteshelf."""

import logging
import os
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_DEV_SECRET = "change-me-in-production"

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", _DEV_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
# Single canonical validity window for every issued token.
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

if JWT_SECRET_KEY == _DEV_SECRET:
    logger.warning("JWT_SECRET_KEY is not set; using the development secret")


def create_access_token(user_id: str, now: Optional[datetime] = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user_id: User ID to encode in token
        now: Issuance time (defaults to the current UTC time)

    Returns:
        Encoded JWT token string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,  # Subject (user ID)
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate a JWT access token.

    Malformed tokens, bad signatures, expired tokens and tokens missing
    `sub`/`exp` all yield None; callers cannot tell them apart.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload (dict with 'sub' key for user_id), or None if invalid
    """
    try:
        return jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    """Extract user ID from a JWT token.

    Args:
        token: JWT token string

    Returns:
        User ID string, or None if token is invalid
    """
    payload = decode_access_token(token)
    if payload:
        sub = payload.get("sub")
        return sub if isinstance(sub, str) and sub else None
    return None
