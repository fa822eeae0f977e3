"""Response schemas specific to the REST API."""

from typing import Any

from pydantic import BaseModel

from rolebridge.application.schemas import RolePayload, UserPayload


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed request.

    Attributes:
        error: Human-readable message.
        violations: Field-level details, present for validation failures.
    """

    error: str
    violations: list[dict[str, str]] | None = None


class SeedResponse(BaseModel):
    """Result of seeding the default roles and administrator account."""

    message: str
    roles: list[RolePayload]
    users: list[UserPayload]


class ToolListResponse(BaseModel):
    """Tool definitions with their argument JSON schemas."""

    tools: list[dict[str, Any]]
