"""Service for seeding the default roles and administrator account.

Seeding is an idempotent upsert by natural key: roles by name, the account
by email. Each upsert commits on its own, so a failure part-way leaves the
earlier upserts in place.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rolebridge.core.config import Settings, get_settings
from rolebridge.core.logging import get_logger
from rolebridge.domain.entities import PERMISSION_VALUES, Role, User
from rolebridge.domain.exceptions import DuplicateKey

if TYPE_CHECKING:
    from rolebridge.infrastructure.persistence.repositories import (
        RoleRepository,
        UserRepository,
    )

logger = get_logger(__name__)

ADMIN_ROLE: dict[str, Any] = {
    "name": "admin",
    "description": "Administrator with full access",
    "permissions": list(PERMISSION_VALUES),
    "is_active": True,
}

USER_ROLE: dict[str, Any] = {
    "name": "user",
    "description": "Regular user with limited access",
    "permissions": ["read"],
    "is_active": True,
}


@dataclass
class SeedResult:
    """Entities produced by a seed run."""

    roles: list[Role] = field(default_factory=list)
    users: list[User] = field(default_factory=list)


class SeedService:
    """Builds the canonical roles and administrator account."""

    def __init__(
        self,
        roles: "RoleRepository",
        users: "UserRepository",
        settings: Settings | None = None,
    ) -> None:
        self.roles = roles
        self.users = users
        self.settings = settings or get_settings()

    def admin_account_fields(self, admin_role_id: str) -> dict[str, Any]:
        """Canonical field set of the seeded administrator account."""
        return {
            "first_name": "Admin",
            "last_name": "User",
            "email": self.settings.seed_admin_email,
            "password": self.settings.seed_admin_password,
            "phone": self.settings.seed_admin_phone,
            "role_id": admin_role_id,
            "is_active": True,
        }

    async def seed(self) -> SeedResult:
        """Upsert the 'admin' and 'user' roles, then the administrator account.

        Returns:
            SeedResult with both roles and the account.
        """
        admin_role = await self.upsert_role(ADMIN_ROLE)
        user_role = await self.upsert_role(USER_ROLE)
        admin_user = await self.upsert_user(self.admin_account_fields(admin_role.id))

        logger.info(
            "Seed data applied",
            role_ids=[admin_role.id, user_role.id],
            user_id=admin_user.id,
        )
        return SeedResult(roles=[admin_role, user_role], users=[admin_user])

    async def upsert_role(self, fields: dict[str, Any]) -> Role:
        """Create the role named in fields, or overwrite it if it exists."""
        name = fields["name"]
        existing = await self.roles.get_by_name(name, case_insensitive=True)
        if existing is None:
            try:
                return await self.roles.create(fields)
            except DuplicateKey:
                # Another caller created it between the lookup and the insert
                existing = await self.roles.get_by_name(name, case_insensitive=True)
                if existing is None:
                    raise
        return await self.roles.update(existing.id, fields)

    async def upsert_user(self, fields: dict[str, Any]) -> User:
        """Create the user with fields['email'], or overwrite its other fields."""
        email = fields["email"]
        existing = await self.users.get_by_email(email)
        if existing is None:
            try:
                return await self.users.create(fields)
            except DuplicateKey:
                existing = await self.users.get_by_email(email)
                if existing is None:
                    raise
        overwrite = {key: value for key, value in fields.items() if key != "email"}
        return await self.users.update(existing.id, overwrite)
