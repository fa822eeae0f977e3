"""SQLAlchemy models for the RoleBridge tables.

All models inherit from the Base class defined in database.py and are
created on application startup outside production.
"""

from rolebridge.infrastructure.persistence.models.role import RoleModel
from rolebridge.infrastructure.persistence.models.user import UserModel

__all__ = [
    "RoleModel",
    "UserModel",
]
