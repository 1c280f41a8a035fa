"""
Security utilities for authentication.

Provides password hashing (bcrypt) and session token generation.
"""

import re
import secrets
from functools import lru_cache
from typing import Optional

from passlib.context import CryptContext

# 32 random bytes, hex encoded
SESSION_TOKEN_BYTES = 32
SESSION_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{64}$", re.IGNORECASE)

DEFAULT_BCRYPT_ROUNDS = 12


@lru_cache(maxsize=None)
def _pwd_context(rounds: int) -> CryptContext:
    """Password hashing context using bcrypt at the given cost factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return _pwd_context(DEFAULT_BCRYPT_ROUNDS).verify(plain_password, hashed_password)


def get_password_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash
        rounds: bcrypt cost factor

    Returns:
        The hashed password string
    """
    return _pwd_context(rounds).hash(password)


def generate_session_token() -> str:
    """
    Create a cryptographically random session token.

    Returns:
        64 lowercase hexadecimal characters (256 bits)
    """
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def is_session_token_shaped(value: Optional[str]) -> bool:
    """Whether ``value`` has the exact shape of a generated session token."""
    return isinstance(value, str) and SESSION_TOKEN_PATTERN.fullmatch(value) is not None
