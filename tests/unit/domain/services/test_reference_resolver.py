"""Unit tests for ReferenceResolver."""

from dataclasses import dataclass
from unittest.mock import AsyncMock

import pytest

from rolebridge.domain.exceptions import ReferenceNotFound
from rolebridge.domain.services import ReferenceResolver

ADMIN_ID = "65a1f3c2e4b0a1b2c3d4e5f6"
USER_ID = "65a1f3c2e4b0a1b2c3d4e5f7"


@dataclass
class FakeRole:
    id: str
    name: str


@pytest.fixture
def roles():
    lookup = AsyncMock()
    lookup.list_all.return_value = [FakeRole(ADMIN_ID, "admin"), FakeRole(USER_ID, "User")]
    lookup.get_by_id.return_value = None
    return lookup


@pytest.mark.asyncio
async def test_identifier_returned_without_lookup(roles):
    resolver = ReferenceResolver(roles)

    assert await resolver.resolve("ffffffffffffffffffffffff") == "ffffffffffffffffffffffff"
    roles.list_all.assert_not_called()
    roles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_name_resolved_case_insensitively(roles):
    resolver = ReferenceResolver(roles)

    assert await resolver.resolve("ADMIN") == ADMIN_ID
    assert await resolver.resolve("user") == USER_ID


@pytest.mark.asyncio
async def test_every_call_scans_again(roles):
    resolver = ReferenceResolver(roles)

    await resolver.resolve("admin")
    await resolver.resolve("admin")

    assert roles.list_all.await_count == 2


@pytest.mark.asyncio
async def test_unknown_name_raises(roles):
    resolver = ReferenceResolver(roles)

    with pytest.raises(ReferenceNotFound) as exc_info:
        await resolver.resolve("superuser")

    assert exc_info.value.input == "superuser"
    assert exc_info.value.message == "Failed to resolve role: Role 'superuser' not found"


@pytest.mark.asyncio
async def test_blank_input_raises(roles):
    resolver = ReferenceResolver(roles)

    with pytest.raises(ReferenceNotFound):
        await resolver.resolve("   ")
    roles.list_all.assert_not_called()


@pytest.mark.asyncio
async def test_strict_mode_checks_identifier(roles):
    resolver = ReferenceResolver(roles, strict=True)

    with pytest.raises(ReferenceNotFound):
        await resolver.resolve("ffffffffffffffffffffffff")
    roles.get_by_id.assert_awaited_once_with("ffffffffffffffffffffffff")


@pytest.mark.asyncio
async def test_strict_mode_accepts_existing_identifier(roles):
    roles.get_by_id.return_value = FakeRole(ADMIN_ID, "admin")
    resolver = ReferenceResolver(roles, strict=True)

    assert await resolver.resolve(ADMIN_ID) == ADMIN_ID


@pytest.mark.asyncio
async def test_uppercase_identifier_is_lowercased(roles):
    resolver = ReferenceResolver(roles)

    assert await resolver.resolve(ADMIN_ID.upper()) == ADMIN_ID


@pytest.mark.asyncio
async def test_strict_mode_looks_up_lowercased_identifier(roles):
    roles.get_by_id.return_value = FakeRole(ADMIN_ID, "admin")
    resolver = ReferenceResolver(roles, strict=True)

    assert await resolver.resolve(ADMIN_ID.upper()) == ADMIN_ID
    roles.get_by_id.assert_awaited_once_with(ADMIN_ID)


def test_reference_not_found_keeps_input():
    error = ReferenceNotFound(reference="Editor")

    assert error.input == "Editor"
    assert error.message == "Failed to resolve role: Role 'Editor' not found"
