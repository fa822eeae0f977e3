"""Serialized views of roles and users.

These are what a caller gets back as structured data, from either the tool
gateway or the REST API. Users never carry a password or its hash.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rolebridge.domain.entities import Role, RoleSummary, User


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict[str, Any]:
        """Dump to JSON-compatible primitives with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class RoleSummaryPayload(Payload):
    """A role as embedded in a user."""

    id: str
    name: str
    description: str

    @classmethod
    def from_entity(cls, summary: RoleSummary) -> "RoleSummaryPayload":
        return cls(id=summary.id, name=summary.name, description=summary.description)


class RolePayload(Payload):
    """A full role record."""

    id: str
    name: str
    description: str
    permissions: list[str]
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, role: Role) -> "RolePayload":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            permissions=list(role.permissions),
            is_active=role.is_active,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class UserPayload(Payload):
    """A user record with its role populated.

    role is None when the stored role reference points at no role.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    date_of_birth: date | None = None
    role: RoleSummaryPayload | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserPayload":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            date_of_birth=user.date_of_birth,
            role=RoleSummaryPayload.from_entity(user.role) if user.role else None,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
