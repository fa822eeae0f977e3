"""Domain entities for RoleBridge.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from rolebridge.domain.entities.role import (
    PERMISSION_VALUES,
    Permission,
    Role,
    RoleSummary,
)
from rolebridge.domain.entities.user import User

__all__ = [
    "PERMISSION_VALUES",
    "Permission",
    "Role",
    "RoleSummary",
    "User",
]
