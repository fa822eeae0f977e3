"""Roles API routes.

Provides CRUD endpoints for roles. Domain errors raised by the repository
are turned into responses by the handlers registered in app.py.
"""

from fastapi import APIRouter, status

from rolebridge.application.schemas import CreateRoleArguments, RoleChanges, RolePayload
from rolebridge.core.logging import get_logger
from rolebridge.infrastructure.api.dependencies import RoleRepositoryDep
from rolebridge.infrastructure.api.schemas import ErrorResponse, MessageResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=list[RolePayload])
async def list_roles(roles: RoleRepositoryDep) -> list[RolePayload]:
    """List all roles in creation order."""
    found = await roles.find_all()
    logger.debug("Roles listed", count=len(found))
    return [RolePayload.from_entity(role) for role in found]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RolePayload,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def create_role(
    role_request: CreateRoleArguments, roles: RoleRepositoryDep
) -> RolePayload:
    """Create a role."""
    role = await roles.create(role_request.model_dump(exclude_unset=True))
    return RolePayload.from_entity(role)


@router.get(
    "/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=RolePayload,
    responses={404: {"model": ErrorResponse, "description": "Role not found"}},
)
async def get_role(role_id: str, roles: RoleRepositoryDep) -> RolePayload:
    """Get a role by ID."""
    return RolePayload.from_entity(await roles.find_by_id(role_id))


@router.put(
    "/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=RolePayload,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def update_role(
    role_id: str, role_request: RoleChanges, roles: RoleRepositoryDep
) -> RolePayload:
    """Apply a partial update to a role. Only the fields sent are changed."""
    role = await roles.update(role_id, role_request.model_dump(exclude_unset=True))
    return RolePayload.from_entity(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role still assigned to users"},
    },
)
async def delete_role(role_id: str, roles: RoleRepositoryDep) -> MessageResponse:
    """Delete a role.

    Users that reference the role keep the dangling reference unless the
    delete policy is 'restrict', in which case the delete is refused.
    """
    await roles.delete(role_id)
    return MessageResponse(message="Role deleted successfully")
