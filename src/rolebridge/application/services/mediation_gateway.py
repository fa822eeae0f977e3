"""Tool-call gateway over the role and user repositories.

The gateway exposes nine named operations. A call never raises: every
outcome, including unexpected failures, comes back as a ToolResponse whose
text is safe to show to the caller.
"""

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from rolebridge.application.schemas import (
    CreateRoleArguments,
    CreateUserArguments,
    DeleteEntityArguments,
    GetEntitiesArguments,
    RolePayload,
    SeedArguments,
    ToolArguments,
    ToolResponse,
    UpdateRoleArguments,
    UpdateUserArguments,
    UserPayload,
)
from rolebridge.application.services import response_renderer as render
from rolebridge.core.config import Settings, get_settings
from rolebridge.core.logging import LoggingContext, get_logger
from rolebridge.domain.exceptions import (
    FieldViolation,
    MediationError,
    UnknownTool,
    ValidationFailed,
)
from rolebridge.domain.services import ReferenceResolver
from rolebridge.domain.services.seed_service import SeedService
from rolebridge.infrastructure.auth import hash_password
from rolebridge.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

INTERNAL_ERROR_MESSAGE = "Tool execution failed"


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation exposed by the gateway.

    Attributes:
        name: Tool name as called on the wire.
        description: One-line description for tool listings.
        action: Verb phrase used in failure renderings ('create user').
        arguments: Model that parses the argument bag.
    """

    name: str
    description: str
    action: str
    arguments: type[ToolArguments]

    def describe(self) -> dict[str, Any]:
        """Listing entry: name, description and JSON schema of the arguments."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.arguments.model_json_schema(by_alias=True),
        }


TOOLS: dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (
        ToolDefinition(
            "create_user",
            "Create a new user with role assignment",
            "create user",
            CreateUserArguments,
        ),
        ToolDefinition(
            "get_users",
            "Get all users or a specific user by ID",
            "retrieve users",
            GetEntitiesArguments,
        ),
        ToolDefinition(
            "update_user",
            "Update an existing user",
            "update user",
            UpdateUserArguments,
        ),
        ToolDefinition(
            "delete_user",
            "Delete a user by ID",
            "delete user",
            DeleteEntityArguments,
        ),
        ToolDefinition(
            "create_role",
            "Create a new role with permissions",
            "create role",
            CreateRoleArguments,
        ),
        ToolDefinition(
            "get_roles",
            "Get all roles or a specific role by ID",
            "retrieve roles",
            GetEntitiesArguments,
        ),
        ToolDefinition(
            "update_role",
            "Update an existing role",
            "update role",
            UpdateRoleArguments,
        ),
        ToolDefinition(
            "delete_role",
            "Delete a role by ID",
            "delete role",
            DeleteEntityArguments,
        ),
        ToolDefinition(
            "seed_database",
            "Seed the database with default roles and admin user",
            "seed database",
            SeedArguments,
        ),
    )
}


def parse_arguments(model: type[ToolArguments], arguments: Any) -> ToolArguments:
    """Parse an argument bag, reporting problems as a ValidationFailed.

    Violation fields use the wire names of the offending arguments.
    """
    try:
        return model.model_validate(arguments if arguments is not None else {})
    except ValidationError as e:
        violations = [
            FieldViolation(
                field=".".join(str(part) for part in error["loc"]) or "arguments",
                message=error["msg"],
                code=error["type"],
            )
            for error in e.errors()
        ]
        raise ValidationFailed(violations) from e


class MediationGateway:
    """Dispatches named tool calls to the repositories and renders the outcome.

    The gateway holds no per-call state; each call runs in a session of its
    own obtained from session_factory.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        hasher: Callable[[str], str] = hash_password,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            session_factory: Callable returning an async context manager that
                yields an AsyncSession (an async_sessionmaker works).
            hasher: Password hasher handed to the user repository.
            settings: Application settings. Defaults to get_settings().
        """
        self.session_factory = session_factory
        self.hasher = hasher
        self.settings = settings or get_settings()
        self._handlers: dict[
            str, Callable[[AsyncSession, Any], Awaitable[ToolResponse]]
        ] = {
            "create_user": self._create_user,
            "get_users": self._get_users,
            "update_user": self._update_user,
            "delete_user": self._delete_user,
            "create_role": self._create_role,
            "get_roles": self._get_roles,
            "update_role": self._update_role,
            "delete_role": self._delete_role,
            "seed_database": self._seed_database,
        }

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe every tool the gateway exposes."""
        return [tool.describe() for tool in TOOLS.values()]

    async def call_tool(self, name: str, arguments: Any = None) -> ToolResponse:
        """Run a tool and render its outcome.

        Args:
            name: Tool name.
            arguments: Argument bag with camelCase keys.

        Returns:
            ToolResponse; is_error is set for every failure.
        """
        tool = TOOLS.get(name)
        if tool is None:
            error = UnknownTool(name)
            logger.warning("Unknown tool requested", tool=name)
            return ToolResponse.failure(f"❌ {error.message}", type(error).__name__)

        with LoggingContext(tool=name):
            try:
                args = parse_arguments(tool.arguments, arguments)
                async with self.session_factory() as session:
                    response = await self._handlers[name](session, args)
            except MediationError as e:
                logger.info(
                    "Tool call failed",
                    error_type=type(e).__name__,
                    error=e.message,
                )
                return ToolResponse.failure(
                    render.render_failure(tool.action, e), type(e).__name__
                )
            except Exception as e:
                logger.exception("Tool call raised an unexpected error", error=str(e))
                return ToolResponse.failure(
                    f"❌ Failed to {tool.action}: {INTERNAL_ERROR_MESSAGE}",
                    "InternalError",
                )

            logger.info("Tool call succeeded")
            return response

    def _roles(self, session: AsyncSession) -> RoleRepository:
        return RoleRepository(session, delete_policy=self.settings.role_delete_policy)

    def _users(self, session: AsyncSession) -> UserRepository:
        return UserRepository(session, hasher=self.hasher)

    def _resolver(self, session: AsyncSession) -> ReferenceResolver:
        return ReferenceResolver(
            self._roles(session), strict=self.settings.strict_role_references
        )

    async def _create_user(
        self, session: AsyncSession, args: CreateUserArguments
    ) -> ToolResponse:
        role_id = await self._resolver(session).resolve(args.role)
        fields = args.model_dump(exclude_unset=True, exclude={"role"})
        fields["role_id"] = role_id

        user = await self._users(session).create(fields)
        return ToolResponse.success(
            render.render_user_created(user), UserPayload.from_entity(user).dump()
        )

    async def _get_users(
        self, session: AsyncSession, args: GetEntitiesArguments
    ) -> ToolResponse:
        users = self._users(session)
        if args.id:
            user = await users.find_by_id(args.id)
            return ToolResponse.success(
                render.render_user_detail(user), UserPayload.from_entity(user).dump()
            )

        found = await users.find_all()
        return ToolResponse.success(
            render.render_user_list(found),
            [UserPayload.from_entity(user).dump() for user in found],
        )

    async def _update_user(
        self, session: AsyncSession, args: UpdateUserArguments
    ) -> ToolResponse:
        fields = args.model_dump(exclude_unset=True, exclude={"id"})
        if "role" in fields:
            role = fields.pop("role")
            fields["role_id"] = (
                await self._resolver(session).resolve(role) if role is not None else None
            )

        user = await self._users(session).update(args.id, fields)
        return ToolResponse.success(
            render.render_user_updated(user), UserPayload.from_entity(user).dump()
        )

    async def _delete_user(
        self, session: AsyncSession, args: DeleteEntityArguments
    ) -> ToolResponse:
        await self._users(session).delete(args.id)
        return ToolResponse.success(render.render_user_deleted(), {"id": args.id})

    async def _create_role(
        self, session: AsyncSession, args: CreateRoleArguments
    ) -> ToolResponse:
        fields = args.model_dump(exclude_unset=True)

        role = await self._roles(session).create(fields)
        return ToolResponse.success(
            render.render_role_created(role), RolePayload.from_entity(role).dump()
        )

    async def _get_roles(
        self, session: AsyncSession, args: GetEntitiesArguments
    ) -> ToolResponse:
        roles = self._roles(session)
        if args.id:
            role = await roles.find_by_id(args.id)
            return ToolResponse.success(
                render.render_role_detail(role), RolePayload.from_entity(role).dump()
            )

        found = await roles.find_all()
        return ToolResponse.success(
            render.render_role_list(found),
            [RolePayload.from_entity(role).dump() for role in found],
        )

    async def _update_role(
        self, session: AsyncSession, args: UpdateRoleArguments
    ) -> ToolResponse:
        fields = args.model_dump(exclude_unset=True, exclude={"id"})
        role = await self._roles(session).update(args.id, fields)
        return ToolResponse.success(
            render.render_role_updated(role), RolePayload.from_entity(role).dump()
        )

    async def _delete_role(
        self, session: AsyncSession, args: DeleteEntityArguments
    ) -> ToolResponse:
        await self._roles(session).delete(args.id)
        return ToolResponse.success(render.render_role_deleted(), {"id": args.id})

    async def _seed_database(
        self, session: AsyncSession, args: SeedArguments
    ) -> ToolResponse:
        service = SeedService(self._roles(session), self._users(session), self.settings)
        result = await service.seed()
        text = render.render_seed(
            result.roles,
            result.users,
            self.settings.seed_admin_email,
            self.settings.seed_admin_password,
        )
        return ToolResponse.success(
            text,
            {
                "roles": [RolePayload.from_entity(role).dump() for role in result.roles],
                "users": [UserPayload.from_entity(user).dump() for user in result.users],
            },
        )
