"""Role reference resolution.

Callers name a role either by its identifier or by its human-readable name.
Identifier-shaped input is trusted as-is; anything else is looked up by a
case-insensitive scan of all roles. The scan is repeated on every call.
"""

from typing import Protocol

from rolebridge.core.logging import get_logger
from rolebridge.domain.exceptions import ReferenceNotFound
from rolebridge.domain.services.object_id_generator import ObjectIdGenerator

logger = get_logger(__name__)


class RoleRecord(Protocol):
    id: str
    name: str


class RoleLookup(Protocol):
    """The subset of the role repository the resolver needs."""

    async def list_all(self) -> list[RoleRecord]: ...

    async def get_by_id(self, role_id: str) -> RoleRecord | None: ...


class ReferenceResolver:
    """Resolves a role identifier-or-name to a canonical role ID."""

    def __init__(self, roles: RoleLookup, strict: bool = False) -> None:
        """Initialize the resolver.

        Args:
            roles: Role lookup, normally a RoleRepository.
            strict: When True, identifier-shaped input must exist in the store.
        """
        self.roles = roles
        self.strict = strict

    async def resolve(self, identifier_or_name: str) -> str:
        """Resolve a role reference.

        Args:
            identifier_or_name: A 24-hex-character role ID or a role name.

        Returns:
            The role ID, lowercased when given in identifier form.

        Raises:
            ReferenceNotFound: If the name matches no role, or in strict mode
                if the identifier does not exist.
        """
        if not isinstance(identifier_or_name, str) or not identifier_or_name.strip():
            raise ReferenceNotFound(str(identifier_or_name or ""))

        if ObjectIdGenerator.validate(identifier_or_name):
            role_id = identifier_or_name.lower()
            if self.strict and await self.roles.get_by_id(role_id) is None:
                logger.info("Role identifier not found", role_reference=identifier_or_name)
                raise ReferenceNotFound(identifier_or_name)
            return role_id

        wanted = identifier_or_name.strip().casefold()
        for role in await self.roles.list_all():
            if role.name.casefold() == wanted:
                logger.debug(
                    "Role reference resolved by name",
                    role_reference=identifier_or_name,
                    role_id=role.id,
                )
                return role.id

        logger.info("Role name not found", role_reference=identifier_or_name)
        raise ReferenceNotFound(identifier_or_name)
