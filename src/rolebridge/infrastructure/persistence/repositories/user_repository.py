"""User repository for database operations."""

import asyncio
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rolebridge.core.logging import get_logger
from rolebridge.domain.entities import RoleSummary, User
from rolebridge.domain.exceptions import NotFound
from rolebridge.domain.services.field_validator import EntityKind, FieldValidator
from rolebridge.infrastructure.auth import hash_password
from rolebridge.infrastructure.persistence.models import UserModel
from rolebridge.infrastructure.persistence.store_errors import translate_store_errors

logger = get_logger(__name__)

USER_KIND = "user"


def to_user_entity(user: UserModel) -> User:
    """Convert a user model to its domain entity.

    The password hash is dropped and the role is reduced to
    {id, name, description}. Requires the 'role' relationship to be loaded.
    """
    role = user.role
    return User(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role_id=user.role_id,
        role=(
            RoleSummary(id=role.id, name=role.name, description=role.description)
            if role is not None
            else None
        ),
        phone=user.phone,
        date_of_birth=user.date_of_birth,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserRepository:
    """Repository for user database operations.

    The role reference is stored as given. Turning a role name into an ID
    is the caller's job (see ReferenceResolver).
    """

    def __init__(
        self,
        session: AsyncSession,
        hasher: Callable[[str], str] = hash_password,
    ) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            hasher: One-way transform applied to plaintext passwords.
        """
        self.session = session
        self.hasher = hasher

    async def _hash_password(self, data: dict[str, Any]) -> dict[str, Any]:
        """Replace a plaintext 'password' entry with 'password_hash'."""
        if "password" in data:
            data = dict(data)
            plaintext = data.pop("password")
            data["password_hash"] = await asyncio.to_thread(self.hasher, plaintext)
        return data

    async def _load_with_role(self, user_id: str) -> UserModel | None:
        async with translate_store_errors(self.session, "email"):
            result = await self.session.execute(
                select(UserModel)
                .where(UserModel.id == user_id.lower())
                .options(selectinload(UserModel.role))
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user model by ID, without its role loaded.

        Args:
            user_id: User ID.

        Returns:
            User model if found, None otherwise.
        """
        async with translate_store_errors(self.session, "email"):
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user_id.lower())
            )
            return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user model by email (compared lowercased)."""
        async with translate_store_errors(self.session, "email"):
            result = await self.session.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            return result.scalar_one_or_none()

    async def create(self, fields: dict[str, Any]) -> User:
        """Create a new user.

        Args:
            fields: Candidate fields keyed by attribute name, including the
                plaintext 'password' and an already-resolved 'role_id'.

        Returns:
            The created user with its role populated.

        Raises:
            ValidationFailed: If the fields violate user constraints.
            DuplicateKey: If a user with the same email exists.
        """
        data = FieldValidator.validate_or_raise(EntityKind.USER, fields)
        data = await self._hash_password(data)
        user = UserModel(**data)

        async with translate_store_errors(self.session, "email", data["email"]):
            self.session.add(user)
            await self.session.commit()

        logger.info("User created", user_id=user.id, role_id=user.role_id)
        return to_user_entity(await self._load_with_role(user.id))

    async def find_all(self) -> list[User]:
        """Return every stored user with roles populated."""
        async with translate_store_errors(self.session, "email"):
            result = await self.session.execute(
                select(UserModel)
                .options(selectinload(UserModel.role))
                .order_by(UserModel.created_at, UserModel.id)
            )
            users = result.scalars().all()
        return [to_user_entity(user) for user in users]

    async def find_by_id(self, user_id: str) -> User:
        """Return a user by ID with its role populated.

        Raises:
            NotFound: If no user has this ID.
        """
        user = await self._load_with_role(user_id)
        if user is None:
            raise NotFound(USER_KIND, user_id)
        return to_user_entity(user)

    async def update(self, user_id: str, fields: dict[str, Any]) -> User:
        """Apply a partial update to a user.

        A present 'password' is re-hashed; an absent one leaves the stored
        hash untouched. 'role_id' is written as given.

        Raises:
            NotFound: If no user has this ID.
            ValidationFailed: If a touched field violates user constraints.
            DuplicateKey: If the new email collides with another user.
        """
        data = FieldValidator.validate_or_raise(EntityKind.USER, fields, partial=True)

        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFound(USER_KIND, user_id)

        if data:
            data = await self._hash_password(data)
            async with translate_store_errors(self.session, "email", data.get("email")):
                for key, value in data.items():
                    setattr(user, key, value)
                await self.session.commit()
            logger.info(
                "User updated",
                user_id=user_id,
                fields=sorted(k for k in data if k != "password_hash"),
                password_changed="password_hash" in data,
            )

        return to_user_entity(await self._load_with_role(user_id))

    async def delete(self, user_id: str) -> None:
        """Hard-delete a user.

        Raises:
            NotFound: If no user has this ID.
        """
        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFound(USER_KIND, user_id)

        async with translate_store_errors(self.session, "email"):
            await self.session.delete(user)
            await self.session.commit()

        logger.info("User deleted", user_id=user_id)
