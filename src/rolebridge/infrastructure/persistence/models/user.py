"""SQLAlchemy model for the users table.

The role reference is an unchecked foreign key: `role_id` carries no
database constraint, so a user may point at a role that does not exist.
The `role` relationship is view-only and resolves to None in that case.
"""

from datetime import date, datetime

from sqlalchemy import Boolean, Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolebridge.domain.services.object_id_generator import generate_object_id
from rolebridge.infrastructure.persistence.database import Base
from rolebridge.infrastructure.persistence.models.role import RoleModel
from rolebridge.infrastructure.persistence.models.timestamps import UtcDateTime, utcnow


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: 24-hex-character primary key generated on insert.
        first_name: Given name.
        last_name: Family name.
        email: Lowercased email address (globally unique).
        password_hash: Argon2 hash of the password.
        phone: Optional phone number.
        date_of_birth: Optional date of birth.
        role_id: Identifier of the referenced role (no FK constraint).
        is_active: Whether the user is active.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
        comment="User ID (24 hex characters)",
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (lowercased)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    role_id: Mapped[str] = mapped_column(
        String(24),
        nullable=False,
        index=True,
        comment="Referenced role ID (not enforced by the database)",
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

    role: Mapped[RoleModel | None] = relationship(
        "RoleModel",
        primaryjoin="foreign(UserModel.role_id) == RoleModel.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
