"""API Routes for RoleBridge."""

from rolebridge.infrastructure.api.routes.roles_router import router as roles_router
from rolebridge.infrastructure.api.routes.seed_router import router as seed_router
from rolebridge.infrastructure.api.routes.tools_router import router as tools_router
from rolebridge.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "roles_router",
    "seed_router",
    "tools_router",
    "users_router",
]
