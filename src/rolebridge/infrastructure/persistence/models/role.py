"""SQLAlchemy model for the roles table."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from rolebridge.domain.services.object_id_generator import generate_object_id
from rolebridge.infrastructure.persistence.database import Base
from rolebridge.infrastructure.persistence.models.timestamps import UtcDateTime, utcnow


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: 24-hex-character primary key generated on insert.
        name: Unique role name.
        description: Description of the role's purpose.
        permissions: JSON list of granted permissions.
        is_active: Whether the role is active.
        created_at: Timestamp when the role was created.
        updated_at: Timestamp when the role was last updated.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
        comment="Role ID (24 hex characters)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Role name (e.g., 'admin', 'user')",
    )
    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Description of the role's purpose",
    )
    permissions: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Granted permissions (read, write, delete, admin)",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


# Names are matched case-insensitively when resolving references,
# so 'Admin' and 'admin' may not coexist.
Index("uq_roles_name_lower", func.lower(RoleModel.name), unique=True)
