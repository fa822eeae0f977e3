"""Unit tests for MediationGateway."""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from rolebridge.application.services import TOOLS, MediationGateway
from rolebridge.domain.exceptions import StoreUnavailable
from rolebridge.infrastructure.persistence.models import UserModel

MISSING_ID = "ffffffffffffffffffffffff"


@pytest.fixture
def gateway(session_factory, hasher, settings):
    return MediationGateway(session_factory, hasher=hasher, settings=settings)


@pytest_asyncio.fixture
async def seeded(gateway):
    response = await gateway.call_tool("seed_database", {})
    assert response.is_error is False
    return response.data


def _john(**overrides):
    arguments = {
        "firstName": "John",
        "lastName": "Doe",
        "email": "JOHN@X.COM",
        "secret": "secret1",
        "role": "admin",
    }
    arguments.update(overrides)
    return arguments


async def _user_count(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count(UserModel.id)))


class TestListTools:
    """Tool listing."""

    def test_lists_nine_tools(self, gateway):
        names = [tool["name"] for tool in gateway.list_tools()]
        assert names == [
            "create_user",
            "get_users",
            "update_user",
            "delete_user",
            "create_role",
            "get_roles",
            "update_role",
            "delete_role",
            "seed_database",
        ]
        assert set(names) == set(TOOLS)

    def test_schemas_use_wire_names(self, gateway):
        tools = {tool["name"]: tool for tool in gateway.list_tools()}

        create_user = tools["create_user"]["inputSchema"]
        assert set(create_user["required"]) == {
            "firstName",
            "lastName",
            "email",
            "password",
            "role",
        }
        assert "dateOfBirth" in create_user["properties"]
        assert "isActive" in create_user["properties"]

        assert tools["update_role"]["inputSchema"]["required"] == ["id"]
        permissions = tools["create_role"]["inputSchema"]["properties"]["permissions"]
        assert permissions["items"]["enum"] == ["read", "write", "delete", "admin"]


class TestUserTools:
    """User operations through the gateway."""

    @pytest.mark.asyncio
    async def test_create_user_scenario(self, gateway, seeded, session_factory):
        response = await gateway.call_tool("create_user", _john())

        assert response.is_error is False
        assert response.data["email"] == "john@x.com"
        assert response.data["role"]["name"] == "admin"
        assert "secret" not in response.data
        assert "password" not in response.data
        assert "passwordHash" not in response.data
        assert response.text.startswith("✅ User created successfully!")
        assert "- Role: admin" in response.text

        duplicate = await gateway.call_tool("create_user", _john(email="John@x.com"))

        assert duplicate.is_error is True
        assert duplicate.error_type == "DuplicateKey"
        assert duplicate.text == "❌ Failed to create user: Email already exists"
        assert await _user_count(session_factory) == 2

    @pytest.mark.asyncio
    async def test_created_user_round_trips(self, gateway, seeded):
        created = await gateway.call_tool(
            "create_user",
            _john(phone="+15550100", dateOfBirth="1990-05-15", password="secret1"),
        )

        fetched = await gateway.call_tool("get_users", {"id": created.data["id"]})

        assert fetched.is_error is False
        assert fetched.data == created.data
        assert fetched.data["dateOfBirth"] == "1990-05-15"
        assert fetched.text.startswith("👤 User Details:")
        assert "- Date of Birth: Tue May 15 1990" in fetched.text

    @pytest.mark.asyncio
    async def test_role_names_resolve_case_insensitively(self, gateway, seeded):
        admin_id = seeded["roles"][0]["id"]

        for index, role in enumerate(["Admin", "admin", "ADMIN"]):
            response = await gateway.call_tool(
                "create_user", _john(email=f"user{index}@x.com", role=role)
            )
            assert response.data["role"]["id"] == admin_id

    @pytest.mark.asyncio
    async def test_uppercase_role_id_resolves(self, gateway, seeded):
        admin_id = seeded["roles"][0]["id"]

        created = await gateway.call_tool("create_user", _john(role=admin_id.upper()))
        fetched = await gateway.call_tool("get_users", {"id": created.data["id"].upper()})
        role = await gateway.call_tool("get_roles", {"id": admin_id.upper()})

        assert created.is_error is False
        assert created.data["role"]["id"] == admin_id
        assert created.data["role"]["name"] == "admin"
        assert fetched.data["role"]["name"] == "admin"
        assert role.is_error is False
        assert role.data["id"] == admin_id

    @pytest.mark.asyncio
    async def test_blank_password_rejected(self, gateway, seeded, session_factory):
        response = await gateway.call_tool("create_user", _john(secret="       "))

        assert response.is_error is True
        assert response.error_type == "ValidationFailed"
        assert response.text.startswith("❌ Failed to create user: password:")
        assert await _user_count(session_factory) == 1

    @pytest.mark.asyncio
    async def test_unknown_role_creates_nothing(self, gateway, seeded, session_factory):
        response = await gateway.call_tool("create_user", _john(role="superuser"))

        assert response.is_error is True
        assert response.error_type == "ReferenceNotFound"
        assert response.text == (
            "❌ Failed to create user: Failed to resolve role: Role 'superuser' not found"
        )
        assert await _user_count(session_factory) == 1

    @pytest.mark.asyncio
    async def test_missing_arguments_use_wire_names(self, gateway):
        response = await gateway.call_tool("create_user", {"firstName": "John"})

        assert response.is_error is True
        assert response.error_type == "ValidationFailed"
        assert "lastName" in response.text
        assert "password" in response.text

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, gateway, seeded):
        response = await gateway.call_tool("create_user", _john(secret="123"))

        assert response.text == (
            "❌ Failed to create user: password: Password must be at least 6 characters"
        )

    @pytest.mark.asyncio
    async def test_list_users(self, gateway, seeded):
        await gateway.call_tool("create_user", _john())

        response = await gateway.call_tool("get_users", {})

        assert response.text.startswith("👥 Found 2 user(s):")
        assert "2. John Doe (john@x.com) - Role: admin - Status: Active" in response.text
        assert len(response.data) == 2

    @pytest.mark.asyncio
    async def test_list_users_empty(self, gateway):
        response = await gateway.call_tool("get_users")

        assert response.is_error is False
        assert response.text == "📝 No users found in the system."
        assert response.data == []

    @pytest.mark.asyncio
    async def test_update_user(self, gateway, seeded):
        created = await gateway.call_tool("create_user", _john())

        response = await gateway.call_tool(
            "update_user", {"id": created.data["id"], "lastName": "Smith", "role": "user"}
        )

        assert response.is_error is False
        assert response.data["lastName"] == "Smith"
        assert response.data["firstName"] == "John"
        assert response.data["role"]["name"] == "user"
        assert "- Name: John Smith" in response.text

    @pytest.mark.asyncio
    async def test_update_missing_user_creates_nothing(self, gateway, seeded, session_factory):
        response = await gateway.call_tool("update_user", {"id": MISSING_ID, "lastName": "X"})

        assert response.error_type == "NotFound"
        assert response.text == "❌ Failed to update user: User not found"
        assert await _user_count(session_factory) == 1

    @pytest.mark.asyncio
    async def test_delete_user(self, gateway, seeded):
        created = await gateway.call_tool("create_user", _john())

        response = await gateway.call_tool("delete_user", {"id": created.data["id"]})
        again = await gateway.call_tool("delete_user", {"id": created.data["id"]})

        assert response.text == "✅ User deleted successfully!"
        assert again.text == "❌ Failed to delete user: User not found"


class TestRoleTools:
    """Role operations through the gateway."""

    @pytest.mark.asyncio
    async def test_create_and_get_role(self, gateway):
        created = await gateway.call_tool(
            "create_role",
            {"name": "editor", "description": "Edits", "permissions": ["read", "write"]},
        )

        assert created.text == (
            "✅ Role created successfully!\n\n"
            "Details:\n"
            "- Name: editor\n"
            "- Description: Edits\n"
            "- Permissions: read, write\n"
            f"- ID: {created.data['id']}"
        )

        fetched = await gateway.call_tool("get_roles", {"id": created.data["id"]})
        assert fetched.text.startswith("🔐 Role Details:")
        assert fetched.data["isActive"] is True

    @pytest.mark.asyncio
    async def test_timestamps_match_between_create_and_get(self, gateway):
        created = await gateway.call_tool(
            "create_role", {"name": "editor", "description": "Edits", "permissions": []}
        )

        fetched = await gateway.call_tool("get_roles", {"id": created.data["id"]})
        listed = await gateway.call_tool("get_roles", {})

        assert fetched.data["createdAt"] == created.data["createdAt"]
        assert fetched.data["updatedAt"] == created.data["updatedAt"]
        assert listed.data[0]["createdAt"] == created.data["createdAt"]
        assert fetched.data["createdAt"].endswith("Z")

    @pytest.mark.asyncio
    async def test_duplicate_role_name(self, gateway):
        arguments = {"name": "editor", "description": "Edits", "permissions": []}
        await gateway.call_tool("create_role", arguments)

        response = await gateway.call_tool("create_role", arguments)

        assert response.error_type == "DuplicateKey"
        assert response.text == "❌ Failed to create role: Role name already exists"

    @pytest.mark.asyncio
    async def test_invalid_permission(self, gateway):
        response = await gateway.call_tool(
            "create_role", {"name": "x", "description": "y", "permissions": ["fly"]}
        )

        assert response.error_type == "ValidationFailed"
        assert "'fly' is not a valid permission" in response.text

    @pytest.mark.asyncio
    async def test_list_roles(self, gateway, seeded):
        response = await gateway.call_tool("get_roles", {})

        assert response.text == (
            "🔐 Found 2 role(s):\n\n"
            "1. admin - Administrator with full access - "
            "Permissions: [read, write, delete, admin] - Status: Active\n"
            "2. user - Regular user with limited access - "
            "Permissions: [read] - Status: Active"
        )

    @pytest.mark.asyncio
    async def test_list_roles_empty(self, gateway):
        response = await gateway.call_tool("get_roles", {})
        assert response.text == "📝 No roles found in the system."

    @pytest.mark.asyncio
    async def test_update_role(self, gateway, seeded):
        user_role = seeded["roles"][1]

        response = await gateway.call_tool(
            "update_role", {"id": user_role["id"], "permissions": ["read", "write"]}
        )

        assert response.data["permissions"] == ["read", "write"]
        assert response.data["description"] == "Regular user with limited access"
        assert response.text.endswith("- Permissions: read, write")

    @pytest.mark.asyncio
    async def test_delete_role_leaves_users_dangling(self, gateway, seeded):
        admin_role = seeded["roles"][0]
        admin_user = seeded["users"][0]

        response = await gateway.call_tool("delete_role", {"id": admin_role["id"]})
        fetched = await gateway.call_tool("get_users", {"id": admin_user["id"]})

        assert response.text == "✅ Role deleted successfully!"
        assert fetched.is_error is False
        assert fetched.data["role"] is None
        assert "- Role: (unknown role)" in fetched.text

    @pytest.mark.asyncio
    async def test_restrict_policy(self, session_factory, hasher, settings, seeded):
        strict = MediationGateway(
            session_factory,
            hasher=hasher,
            settings=settings.model_copy(update={"role_delete_policy": "restrict"}),
        )

        response = await strict.call_tool("delete_role", {"id": seeded["roles"][0]["id"]})

        assert response.error_type == "ReferenceInUse"
        assert response.text.startswith("❌ Failed to delete role: ")


class TestSeedTool:
    """seed_database through the gateway."""

    @pytest.mark.asyncio
    async def test_seed_twice_keeps_identifiers(self, gateway):
        first = await gateway.call_tool("seed_database")
        second = await gateway.call_tool("seed_database")

        assert [r["id"] for r in first.data["roles"]] == [r["id"] for r in second.data["roles"]]
        assert first.data["users"][0]["id"] == second.data["users"][0]["id"]

    @pytest.mark.asyncio
    async def test_seed_text(self, gateway):
        response = await gateway.call_tool("seed_database", {})

        assert response.text.startswith("✅ Database seeded successfully!")
        assert "- 2 roles\n- 1 users" in response.text
        assert "- Email: admin@example.com\n- Password: admin123" in response.text


class TestFailures:
    """Failures never escape the gateway."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, gateway):
        response = await gateway.call_tool("drop_database", {})

        assert response.is_error is True
        assert response.error_type == "UnknownTool"
        assert response.text == "❌ Unknown tool: drop_database"

    @pytest.mark.asyncio
    async def test_non_object_arguments(self, gateway):
        response = await gateway.call_tool("delete_user", ["not", "an", "object"])

        assert response.is_error is True
        assert response.error_type == "ValidationFailed"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_rendered(self, gateway):
        with patch(
            "rolebridge.application.services.mediation_gateway.RoleRepository.find_all",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            response = await gateway.call_tool("get_roles", {})

        assert response.is_error is True
        assert response.error_type == "InternalError"
        assert response.text == "❌ Failed to retrieve roles: Tool execution failed"
        assert "boom" not in response.text

    @pytest.mark.asyncio
    async def test_store_unavailable_is_rendered(self, gateway):
        store_down = StoreUnavailable(OperationalError("SELECT", {}, Exception("down")))
        with patch(
            "rolebridge.application.services.mediation_gateway.UserRepository.get_by_id",
            new=AsyncMock(side_effect=store_down),
        ):
            response = await gateway.call_tool("delete_user", {"id": MISSING_ID})

        assert response.error_type == "StoreUnavailable"
        assert response.text == "❌ Failed to delete user: Store unavailable: OperationalError"
