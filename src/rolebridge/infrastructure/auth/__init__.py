"""Credential handling for RoleBridge."""

from rolebridge.infrastructure.auth.password_hasher import (
    hash_password,
    verify_password,
)

__all__ = [
    "hash_password",
    "verify_password",
]
