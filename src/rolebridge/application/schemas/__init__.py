"""Schemas shared by the tool gateway and the REST API."""

from rolebridge.application.schemas.envelope import TextContent, ToolResponse
from rolebridge.application.schemas.payloads import (
    RolePayload,
    RoleSummaryPayload,
    UserPayload,
)
from rolebridge.application.schemas.tool_schemas import (
    CreateRoleArguments,
    CreateUserArguments,
    DeleteEntityArguments,
    GetEntitiesArguments,
    RoleChanges,
    SeedArguments,
    ToolArguments,
    UpdateRoleArguments,
    UpdateUserArguments,
    UserChanges,
)

__all__ = [
    "CreateRoleArguments",
    "CreateUserArguments",
    "DeleteEntityArguments",
    "GetEntitiesArguments",
    "RoleChanges",
    "RolePayload",
    "RoleSummaryPayload",
    "SeedArguments",
    "TextContent",
    "ToolArguments",
    "ToolResponse",
    "UpdateRoleArguments",
    "UpdateUserArguments",
    "UserChanges",
    "UserPayload",
]
