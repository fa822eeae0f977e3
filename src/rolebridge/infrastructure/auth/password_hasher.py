"""Password hashing utility using Argon2.

Provides password hashing and verification using the Argon2id algorithm.
The time cost (work factor) comes from ROLEBRIDGE_PASSWORD_HASH_TIME_COST.
"""

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from rolebridge.core.config import get_settings


@lru_cache
def get_hasher(time_cost: int | None = None) -> PasswordHasher:
    """Get a cached Argon2id hasher.

    Args:
        time_cost: Number of iterations. Defaults to the configured value.
    """
    if time_cost is None:
        time_cost = get_settings().password_hash_time_cost
    return PasswordHasher(time_cost=time_cost)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("secret1")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return get_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        get_hasher().verify(hashed, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
