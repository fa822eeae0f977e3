"""FastAPI dependencies for repositories, role resolution and the tool gateway."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rolebridge.application.services import MediationGateway
from rolebridge.core.config import Settings, get_settings
from rolebridge.domain.services import ReferenceResolver
from rolebridge.infrastructure.persistence.database import get_db_manager, get_db_session
from rolebridge.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_role_repository(session: SessionDep, settings: SettingsDep) -> RoleRepository:
    """Role repository bound to the request session."""
    return RoleRepository(session, delete_policy=settings.role_delete_policy)


def get_user_repository(session: SessionDep) -> UserRepository:
    """User repository bound to the request session."""
    return UserRepository(session)


def get_reference_resolver(
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
    settings: SettingsDep,
) -> ReferenceResolver:
    """Role reference resolver sharing the request's role repository."""
    return ReferenceResolver(roles, strict=settings.strict_role_references)


def get_mediation_gateway(settings: SettingsDep) -> MediationGateway:
    """Tool gateway opening its own sessions from the global database manager."""
    return MediationGateway(get_db_manager().session, settings=settings)


RoleRepositoryDep = Annotated[RoleRepository, Depends(get_role_repository)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
ResolverDep = Annotated[ReferenceResolver, Depends(get_reference_resolver)]
GatewayDep = Annotated[MediationGateway, Depends(get_mediation_gateway)]
