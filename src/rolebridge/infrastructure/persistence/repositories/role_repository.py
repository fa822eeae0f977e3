"""Role repository for database operations."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rolebridge.core.logging import get_logger
from rolebridge.domain.entities import Role
from rolebridge.domain.exceptions import NotFound, ReferenceInUse
from rolebridge.domain.services.field_validator import EntityKind, FieldValidator
from rolebridge.infrastructure.persistence.models import RoleModel, UserModel
from rolebridge.infrastructure.persistence.store_errors import translate_store_errors

logger = get_logger(__name__)

ROLE_KIND = "role"


def to_role_entity(role: RoleModel) -> Role:
    """Convert a role model to its domain entity."""
    return Role(
        id=role.id,
        name=role.name,
        description=role.description,
        permissions=list(role.permissions or []),
        is_active=role.is_active,
        created_at=role.created_at,
        updated_at=role.updated_at,
    )


class RoleRepository:
    """Repository for role database operations.

    Every mutating call validates its input, commits its own transaction and
    translates store failures into domain errors.
    """

    def __init__(self, session: AsyncSession, delete_policy: str = "allow") -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            delete_policy: 'allow' deletes unconditionally; 'restrict' refuses
                to delete a role that users still reference.
        """
        self.session = session
        self.delete_policy = delete_policy

    async def get_by_id(self, role_id: str) -> RoleModel | None:
        """Get a role model by ID.

        Args:
            role_id: Role ID.

        Returns:
            Role model if found, None otherwise.
        """
        async with translate_store_errors(self.session, "name"):
            result = await self.session.execute(
                select(RoleModel).where(RoleModel.id == role_id.lower())
            )
            return result.scalar_one_or_none()

    async def get_by_name(self, name: str, case_insensitive: bool = False) -> RoleModel | None:
        """Get a role model by name.

        Args:
            name: Role name (e.g., 'admin', 'user').
            case_insensitive: Compare lowercased names instead of exact ones.

        Returns:
            Role model if found, None otherwise.
        """
        if case_insensitive:
            condition = func.lower(RoleModel.name) == name.lower()
        else:
            condition = RoleModel.name == name

        async with translate_store_errors(self.session, "name"):
            result = await self.session.execute(select(RoleModel).where(condition))
            return result.scalar_one_or_none()

    async def list_all(self) -> list[RoleModel]:
        """List all role models ordered by creation time."""
        async with translate_store_errors(self.session, "name"):
            result = await self.session.execute(
                select(RoleModel).order_by(RoleModel.created_at, RoleModel.id)
            )
            return list(result.scalars().all())

    async def create(self, fields: dict[str, Any]) -> Role:
        """Create a new role.

        Args:
            fields: Candidate fields keyed by attribute name.

        Returns:
            The created role.

        Raises:
            ValidationFailed: If the fields violate role constraints.
            DuplicateKey: If a role with the same name exists.
        """
        data = FieldValidator.validate_or_raise(EntityKind.ROLE, fields)
        role = RoleModel(**data)

        async with translate_store_errors(self.session, "name", data["name"]):
            self.session.add(role)
            await self.session.commit()

        logger.info("Role created", role_id=role.id, role_name=role.name)
        return to_role_entity(role)

    async def find_all(self) -> list[Role]:
        """Return every stored role."""
        return [to_role_entity(role) for role in await self.list_all()]

    async def find_by_id(self, role_id: str) -> Role:
        """Return a role by ID.

        Raises:
            NotFound: If no role has this ID.
        """
        role = await self.get_by_id(role_id)
        if role is None:
            raise NotFound(ROLE_KIND, role_id)
        return to_role_entity(role)

    async def update(self, role_id: str, fields: dict[str, Any]) -> Role:
        """Apply a partial update to a role.

        Only the fields present are validated and written.

        Raises:
            NotFound: If no role has this ID.
            ValidationFailed: If a touched field violates role constraints.
            DuplicateKey: If the new name collides with another role.
        """
        data = FieldValidator.validate_or_raise(EntityKind.ROLE, fields, partial=True)

        role = await self.get_by_id(role_id)
        if role is None:
            raise NotFound(ROLE_KIND, role_id)

        if data:
            async with translate_store_errors(self.session, "name", data.get("name")):
                for key, value in data.items():
                    setattr(role, key, value)
                await self.session.commit()
            logger.info("Role updated", role_id=role_id, fields=sorted(data))

        return to_role_entity(role)

    async def delete(self, role_id: str) -> None:
        """Hard-delete a role.

        Raises:
            NotFound: If no role has this ID.
            ReferenceInUse: If the policy is 'restrict' and users reference it.
        """
        role = await self.get_by_id(role_id)
        if role is None:
            raise NotFound(ROLE_KIND, role_id)

        if self.delete_policy == "restrict":
            assigned = await self.count_assigned_users(role_id)
            if assigned:
                logger.info("Role deletion refused", role_id=role_id, assigned_users=assigned)
                raise ReferenceInUse(ROLE_KIND, role_id, assigned)

        async with translate_store_errors(self.session, "name"):
            await self.session.delete(role)
            await self.session.commit()

        logger.info("Role deleted", role_id=role_id, role_name=role.name)

    async def count_assigned_users(self, role_id: str) -> int:
        """Count users whose role reference points at this role."""
        async with translate_store_errors(self.session, "name"):
            result = await self.session.execute(
                select(func.count(UserModel.id)).where(
                    UserModel.role_id == role_id.lower()
                )
            )
            return result.scalar_one() or 0
