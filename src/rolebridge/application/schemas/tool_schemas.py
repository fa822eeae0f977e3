"""Argument schemas for the tool-call operations.

Each tool accepts a loosely-typed argument bag. These models check the
primitive types and required flags of that bag; entity constraints (lengths,
permission values, uniqueness) are left to the field validator and the
repositories. Field names on the wire are camelCase.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rolebridge.domain.entities import PERMISSION_VALUES

_PERMISSIONS_SCHEMA = {"items": {"type": "string", "enum": list(PERMISSION_VALUES)}}


class ToolArguments(BaseModel):
    """Base class for tool argument bags."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CreateUserArguments(ToolArguments):
    first_name: str = Field(..., description="User first name")
    last_name: str = Field(..., description="User last name")
    email: str = Field(..., description="User email address")
    password: str = Field(
        ...,
        validation_alias=AliasChoices("password", "secret"),
        description="User password (minimum 6 characters)",
    )
    phone: str | None = Field(None, description="User phone number (optional)")
    date_of_birth: str | None = Field(
        None, description="User date of birth in YYYY-MM-DD format (optional)"
    )
    role: str = Field(..., description="Role ID or role name for the user")
    is_active: bool | None = Field(None, description="Whether the user is active (default: true)")


class GetEntitiesArguments(ToolArguments):
    id: str | None = Field(None, description="Specific ID to retrieve (optional)")


class UserChanges(ToolArguments):
    """Fields of a partial user update. Absent fields are left untouched."""

    first_name: str | None = Field(None, description="Updated first name (optional)")
    last_name: str | None = Field(None, description="Updated last name (optional)")
    email: str | None = Field(None, description="Updated email address (optional)")
    password: str | None = Field(
        None,
        validation_alias=AliasChoices("password", "secret"),
        description="Updated password (optional)",
    )
    phone: str | None = Field(None, description="Updated phone number (optional)")
    date_of_birth: str | None = Field(
        None, description="Updated date of birth in YYYY-MM-DD format (optional)"
    )
    role: str | None = Field(None, description="Updated role ID or role name (optional)")
    is_active: bool | None = Field(None, description="Updated active status (optional)")


class UpdateUserArguments(UserChanges):
    id: str = Field(..., description="User ID to update")


class DeleteEntityArguments(ToolArguments):
    id: str = Field(..., description="ID of the entity to delete")


class CreateRoleArguments(ToolArguments):
    name: str = Field(..., description="Role name")
    description: str = Field(..., description="Role description")
    permissions: list[str] = Field(
        ...,
        description="Array of permissions for this role",
        json_schema_extra=_PERMISSIONS_SCHEMA,
    )
    is_active: bool | None = Field(None, description="Whether the role is active (default: true)")


class RoleChanges(ToolArguments):
    """Fields of a partial role update. Absent fields are left untouched."""

    name: str | None = Field(None, description="Updated role name (optional)")
    description: str | None = Field(None, description="Updated role description (optional)")
    permissions: list[str] | None = Field(
        None,
        description="Updated permissions array (optional)",
        json_schema_extra=_PERMISSIONS_SCHEMA,
    )
    is_active: bool | None = Field(None, description="Updated active status (optional)")


class UpdateRoleArguments(RoleChanges):
    id: str = Field(..., description="Role ID to update")


class SeedArguments(ToolArguments):
    pass
