"""Integration tests for the seed API."""

import pytest


@pytest.mark.asyncio
async def test_seed_creates_defaults(client):
    response = await client.post("/api/seed")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Seed data created successfully"
    assert [role["name"] for role in body["roles"]] == ["admin", "user"]
    assert body["users"][0]["email"] == "admin@example.com"
    assert body["users"][0]["role"]["name"] == "admin"


@pytest.mark.asyncio
async def test_seed_is_idempotent(client):
    first = (await client.post("/api/seed")).json()
    second = (await client.post("/api/seed")).json()

    assert [role["id"] for role in second["roles"]] == [role["id"] for role in first["roles"]]
    assert second["users"][0]["id"] == first["users"][0]["id"]
    assert len((await client.get("/api/roles")).json()) == 2
    assert len((await client.get("/api/users")).json()) == 1
