"""
Password and API Key Utilities

Secure password hashing using bcrypt via passlib, and API key generation.
"""

import secrets

from passlib.context import CryptContext

from taskapi.config import settings
from taskapi.logging_config import get_logger

logger = get_logger(__name__)

# 16 random bytes rendered as 32 hex characters
API_KEY_BYTES = 16

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt

    Args:
        password: Plain text password

    Returns:
        Hashed password string

    Example:
        >>> hashed = hash_password("my_secure_password")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash

    A stored value that is not a recognizable hash counts as a mismatch.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    try:
        is_valid = pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash is not recognized")
        return False

    if not is_valid:
        logger.debug("Password verification failed")

    return is_valid


def generate_api_key() -> str:
    """Generate a new 32-character API key."""
    return secrets.token_hex(API_KEY_BYTES)
