"""User entity as returned by the mediation layer.

The entity never carries the password or its hash; repositories strip it
before handing a user out.
"""

from dataclasses import dataclass
from datetime import date, datetime

from rolebridge.domain.entities.role import RoleSummary


@dataclass
class User:
    """User entity with its role reference populated.

    Attributes:
        id: 24-character hexadecimal identifier assigned on insert.
        first_name: Given name.
        last_name: Family name.
        email: Lowercased, unique email address.
        role_id: Identifier of the referenced role (unchecked reference).
        role: Populated role, or None when the reference is dangling.
        phone: Optional phone number.
        date_of_birth: Optional date of birth.
        is_active: Whether the user is active.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    role_id: str
    role: RoleSummary | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
