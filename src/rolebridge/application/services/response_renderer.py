"""Human-readable renderings of tool results.

Every rendering is a plain multi-line string. Users whose role reference
points at no role are rendered with UNKNOWN_ROLE in place of the role name.
"""

from datetime import date, datetime

from rolebridge.domain.entities import Role, User
from rolebridge.domain.exceptions import MediationError

UNKNOWN_ROLE = "(unknown role)"
NOT_PROVIDED = "Not provided"


def _status(is_active: bool) -> str:
    return "Active" if is_active else "Inactive"


def _timestamp(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else NOT_PROVIDED


def _birth_date(value: date | None) -> str:
    return value.strftime("%a %b %d %Y") if value else NOT_PROVIDED


def _permissions(role: Role) -> str:
    return ", ".join(role.permissions)


def _role_name(user: User) -> str:
    return user.role.name if user.role else UNKNOWN_ROLE


def render_failure(action: str, error: MediationError) -> str:
    """Render a failed operation, e.g. '❌ Failed to create user: Email already exists'."""
    return f"❌ Failed to {action}: {error.message}"


def render_user_created(user: User) -> str:
    return (
        "✅ User created successfully!\n\n"
        "Details:\n"
        f"- Name: {user.full_name}\n"
        f"- Email: {user.email}\n"
        f"- Role: {_role_name(user)}\n"
        f"- ID: {user.id}"
    )


def render_user_detail(user: User) -> str:
    if user.role:
        role = f"{user.role.name} ({user.role.description})"
    else:
        role = UNKNOWN_ROLE
    return (
        "👤 User Details:\n\n"
        f"- ID: {user.id}\n"
        f"- Name: {user.full_name}\n"
        f"- Email: {user.email}\n"
        f"- Phone: {user.phone or NOT_PROVIDED}\n"
        f"- Date of Birth: {_birth_date(user.date_of_birth)}\n"
        f"- Role: {role}\n"
        f"- Status: {_status(user.is_active)}\n"
        f"- Created: {_timestamp(user.created_at)}"
    )


def render_user_list(users: list[User]) -> str:
    if not users:
        return "📝 No users found in the system."
    lines = [
        f"{index}. {user.full_name} ({user.email}) - Role: {_role_name(user)}"
        f" - Status: {_status(user.is_active)}"
        for index, user in enumerate(users, start=1)
    ]
    return f"👥 Found {len(users)} user(s):\n\n" + "\n".join(lines)


def render_user_updated(user: User) -> str:
    return (
        "✅ User updated successfully!\n\n"
        "Updated Details:\n"
        f"- Name: {user.full_name}\n"
        f"- Email: {user.email}\n"
        f"- Role: {_role_name(user)}"
    )


def render_user_deleted() -> str:
    return "✅ User deleted successfully!"


def render_role_created(role: Role) -> str:
    return (
        "✅ Role created successfully!\n\n"
        "Details:\n"
        f"- Name: {role.name}\n"
        f"- Description: {role.description}\n"
        f"- Permissions: {_permissions(role)}\n"
        f"- ID: {role.id}"
    )


def render_role_detail(role: Role) -> str:
    return (
        "🔐 Role Details:\n\n"
        f"- ID: {role.id}\n"
        f"- Name: {role.name}\n"
        f"- Description: {role.description}\n"
        f"- Permissions: {_permissions(role)}\n"
        f"- Status: {_status(role.is_active)}\n"
        f"- Created: {_timestamp(role.created_at)}"
    )


def render_role_list(roles: list[Role]) -> str:
    if not roles:
        return "📝 No roles found in the system."
    lines = [
        f"{index}. {role.name} - {role.description} - Permissions: [{_permissions(role)}]"
        f" - Status: {_status(role.is_active)}"
        for index, role in enumerate(roles, start=1)
    ]
    return f"🔐 Found {len(roles)} role(s):\n\n" + "\n".join(lines)


def render_role_updated(role: Role) -> str:
    return (
        "✅ Role updated successfully!\n\n"
        "Updated Details:\n"
        f"- Name: {role.name}\n"
        f"- Description: {role.description}\n"
        f"- Permissions: {_permissions(role)}"
    )


def render_role_deleted() -> str:
    return "✅ Role deleted successfully!"


def render_seed(roles: list[Role], users: list[User], admin_email: str, admin_password: str) -> str:
    """Render a seed run, including the default administrator login."""
    return (
        "✅ Database seeded successfully!\n\n"
        "Seed data created successfully\n\n"
        "Created:\n"
        f"- {len(roles)} roles\n"
        f"- {len(users)} users\n\n"
        "Default admin login:\n"
        f"- Email: {admin_email}\n"
        f"- Password: {admin_password}"
    )
