"""Users API routes.

Provides CRUD endpoints for users. The 'role' field accepts a role ID or a
role name; names are resolved before anything is written.
"""

from fastapi import APIRouter, status

from rolebridge.application.schemas import CreateUserArguments, UserChanges, UserPayload
from rolebridge.core.logging import get_logger
from rolebridge.infrastructure.api.dependencies import ResolverDep, UserRepositoryDep
from rolebridge.infrastructure.api.schemas import ErrorResponse, MessageResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=list[UserPayload])
async def list_users(users: UserRepositoryDep) -> list[UserPayload]:
    """List all users with their roles populated."""
    found = await users.find_all()
    logger.debug("Users listed", count=len(found))
    return [UserPayload.from_entity(user) for user in found]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserPayload,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or unknown role"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
async def create_user(
    user_request: CreateUserArguments,
    users: UserRepositoryDep,
    resolver: ResolverDep,
) -> UserPayload:
    """Create a user assigned to the given role."""
    fields = user_request.model_dump(exclude_unset=True, exclude={"role"})
    fields["role_id"] = await resolver.resolve(user_request.role)
    user = await users.create(fields)
    return UserPayload.from_entity(user)


@router.get(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserPayload,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: str, users: UserRepositoryDep) -> UserPayload:
    """Get a user by ID."""
    return UserPayload.from_entity(await users.find_by_id(user_id))


@router.put(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserPayload,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or unknown role"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
async def update_user(
    user_id: str,
    user_request: UserChanges,
    users: UserRepositoryDep,
    resolver: ResolverDep,
) -> UserPayload:
    """Apply a partial update to a user. A sent password is re-hashed."""
    fields = user_request.model_dump(exclude_unset=True)
    if "role" in fields:
        role = fields.pop("role")
        fields["role_id"] = await resolver.resolve(role) if role is not None else None
    user = await users.update(user_id, fields)
    return UserPayload.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def delete_user(user_id: str, users: UserRepositoryDep) -> MessageResponse:
    """Delete a user."""
    await users.delete(user_id)
    return MessageResponse(message="User deleted successfully")
