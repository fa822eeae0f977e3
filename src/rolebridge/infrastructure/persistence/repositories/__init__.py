"""Persistence repositories for database operations."""

from rolebridge.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from rolebridge.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "RoleRepository",
    "UserRepository",
]
