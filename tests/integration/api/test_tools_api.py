"""Integration tests for the tool-call API."""

import pytest


@pytest.mark.asyncio
async def test_list_tools(client):
    response = await client.get("/api/tools")

    assert response.status_code == 200
    names = [tool["name"] for tool in response.json()["tools"]]
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


@pytest.mark.asyncio
async def test_call_tool(client):
    response = await client.post(
        "/api/tools/create_role",
        json={"name": "editor", "description": "Can edit", "permissions": ["read"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is False
    assert body["content"][0]["text"].startswith("✅ Role created successfully!")
    assert body["data"]["name"] == "editor"


@pytest.mark.asyncio
async def test_call_tool_without_body(client):
    response = await client.post("/api/tools/get_roles")

    assert response.status_code == 200
    assert response.json()["content"][0]["text"] == "📝 No roles found in the system."


@pytest.mark.asyncio
async def test_failed_tool_call_is_reported_in_envelope(client):
    response = await client.post("/api/tools/delete_role", json={"id": "ffffffffffffffffffffffff"})

    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is True
    assert body["errorType"] == "NotFound"
    assert body["content"][0]["text"] == "❌ Failed to delete role: Role not found"


@pytest.mark.asyncio
async def test_unknown_tool(client):
    response = await client.post("/api/tools/drop_everything", json={})

    assert response.status_code == 404
    assert response.json() == {"error": "Unknown tool: drop_everything"}
