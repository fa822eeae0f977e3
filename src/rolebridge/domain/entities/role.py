"""Role entity for authorization.

Roles are global and carry a set of permissions drawn from a closed
enumeration. Default roles are 'admin' and 'user'.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Permission(str, Enum):
    """Permissions a role may grant."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


PERMISSION_VALUES = tuple(p.value for p in Permission)


@dataclass
class Role:
    """Role entity for user authorization.

    Attributes:
        id: 24-character hexadecimal identifier assigned on insert.
        name: Unique role name (e.g., 'admin', 'user').
        description: Description of the role's purpose.
        permissions: Granted permissions, without duplicates.
        is_active: Whether the role is active.
        created_at: Timestamp when the role was created.
        updated_at: Timestamp when the role was last updated.
    """

    id: str
    name: str
    description: str
    permissions: list[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.name:
            raise ValueError("Role name is required")


@dataclass(frozen=True)
class RoleSummary:
    """The populated view of a role as embedded in a user."""

    id: str
    name: str
    description: str
