"""Seed API route."""

from fastapi import APIRouter, status

from rolebridge.application.schemas import RolePayload, UserPayload
from rolebridge.domain.services.seed_service import SeedService
from rolebridge.infrastructure.api.dependencies import (
    RoleRepositoryDep,
    SettingsDep,
    UserRepositoryDep,
)
from rolebridge.infrastructure.api.schemas import ErrorResponse, SeedResponse

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=SeedResponse,
    responses={503: {"model": ErrorResponse, "description": "Store unavailable"}},
)
async def seed_database(
    roles: RoleRepositoryDep,
    users: UserRepositoryDep,
    settings: SettingsDep,
) -> SeedResponse:
    """Upsert the 'admin' and 'user' roles and the default administrator.

    Safe to call repeatedly; existing records are overwritten in place.
    """
    result = await SeedService(roles, users, settings).seed()
    return SeedResponse(
        message="Seed data created successfully",
        roles=[RolePayload.from_entity(role) for role in result.roles],
        users=[UserPayload.from_entity(user) for user in result.users],
    )
