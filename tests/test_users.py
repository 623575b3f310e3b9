"""Tests for users endpoints."""

import pytest
from httpx import AsyncClient


async def _signup(client: AsyncClient, username: str) -> dict:
    """Helper: sign up a tenant, log the admin in and return auth headers."""
    resp = await client.post("/public/signup", json={
        "companyName": f"{username} Co",
        "username": username,
        "password": "testpass123",
    })
    assert resp.status_code == 201
    return await _login(client, username, "testpass123")


async def _login(client: AsyncClient, username: str, password: str) -> dict:
    resp = await client.post("/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.mark.asyncio
async def test_list_users(client: AsyncClient):
    """Admin can list users and sees only themselves after signup."""
    headers = await _signup(client, username="users-list")

    resp = await client.get("/api/v1/users", headers=headers)
    assert resp.status_code == 200
    users = resp.json()
    assert [u["username"] for u in users] == ["users-list"]
    assert all("passwordHash" not in u for u in users)


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    """Admin can create a new user in the tenant."""
    headers = await _signup(client, username="users-create")

    resp = await client.post("/api/v1/users", json={
        "username": "member-1",
        "password": "memberpass1",
        "role": "member",
    }, headers=headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["username"] == "member-1"
    assert data["role"] == "member"

    # The new user can log in and lands in the same tenant
    member_headers = await _login(client, "member-1", "memberpass1")
    resp = await client.get("/auth/me", headers=member_headers)
    assert resp.json()["tenant"]["id"] == data["tenantId"]


@pytest.mark.asyncio
async def test_create_duplicate_username_rejected(client: AsyncClient):
    """Usernames are unique across all tenants."""
    headers_a = await _signup(client, username="users-dup-a")
    headers_b = await _signup(client, username="users-dup-b")

    user_data = {"username": "shared-name", "password": "password123", "role": "member"}
    resp = await client.post("/api/v1/users", json=user_data, headers=headers_a)
    assert resp.status_code == 201

    resp = await client.post("/api/v1/users", json=user_data, headers=headers_a)
    assert resp.status_code == 409

    resp = await client.post("/api/v1/users", json=user_data, headers=headers_b)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_invalid_role_rejected(client: AsyncClient):
    headers = await _signup(client, username="users-role")

    resp = await client.post("/api/v1/users", json={
        "username": "someone",
        "password": "password123",
        "role": "owner",
    }, headers=headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_member_cannot_create_user(client: AsyncClient):
    """Member-role token cannot manage users (403)."""
    headers = await _signup(client, username="users-perm")

    resp = await client.post("/api/v1/users", json={
        "username": "member-perm",
        "password": "password123",
        "role": "member",
    }, headers=headers)
    assert resp.status_code == 201

    member_headers = await _login(client, "member-perm", "password123")
    resp = await client.post("/api/v1/users", json={
        "username": "another",
        "password": "password123",
        "role": "member",
    }, headers=member_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_users_are_tenant_scoped(client: AsyncClient):
    headers_a = await _signup(client, username="users-iso-a")
    headers_b = await _signup(client, username="users-iso-b")

    await client.post("/api/v1/users", json={
        "username": "a-member",
        "password": "password123",
    }, headers=headers_a)

    resp = await client.get("/api/v1/users", headers=headers_b)
    assert [u["username"] for u in resp.json()] == ["users-iso-b"]
