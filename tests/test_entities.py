"""Tests for the reference entity endpoints (/api/v1/<kind>)."""

import uuid

import pytest
from httpx import AsyncClient

from onboarding.services.permissions import MODULE_SLUGS

SAMPLES = {
    "locations": ({"name": "HQ", "address": "1 Main St", "postalCode": "10115"}, "postalCode"),
    "departments": ({"name": "Engineering", "head": "Ada Lovelace"}, "head"),
    "managers": ({"name": "Grace Hopper", "email": "grace@example.com"}, "email"),
    "job-roles": ({"name": "Engineer", "description": "Builds things"}, "description"),
    "employment-types": ({"name": "Full-Time"}, "name"),
    "teams": ({"name": "Platform"}, "name"),
    "cost-centers": ({"name": "R&D", "code": "ENG-101"}, "code"),
    "hardware-assets": ({"name": "Laptop", "modelNumber": "MBP-14"}, "modelNumber"),
    "onboarding-buddies": (
        {"name": "Sam", "teamId": "0b6c3c2e-8d43-4a8e-9a57-3f5c6f0b9d11"},
        "teamId",
    ),
    "access-levels": ({"name": "Standard"}, "name"),
}


async def _tenant(client: AsyncClient, username: str, modules: list[str] | None = None) -> dict:
    """Helper: sign up a tenant, log in, return auth headers."""
    body = {"companyName": f"{username} Co", "username": username, "password": "testpass123"}
    if modules is not None:
        body["enabledModules"] = modules
    resp = await client.post("/public/signup", json=body)
    assert resp.status_code == 201, resp.text

    resp = await client.post("/auth/login", json={"username": username, "password": "testpass123"})
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", list(SAMPLES))
async def test_entity_crud(client: AsyncClient, kind: str):
    headers = await _tenant(client, f"crud-{kind}", list(MODULE_SLUGS))
    payload, field = SAMPLES[kind]

    # Create
    resp = await client.post(f"/api/v1/{kind}", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created[field] == payload[field]
    entity_id = created["id"]

    # Get
    resp = await client.get(f"/api/v1/{kind}/{entity_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == created

    # List
    resp = await client.get(f"/api/v1/{kind}", headers=headers)
    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()] == [entity_id]

    # Partial update keeps the other fields
    resp = await client.put(f"/api/v1/{kind}/{entity_id}", json={"name": "Renamed"}, headers=headers)
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == "Renamed"
    if field != "name":
        assert updated[field] == payload[field]
    assert updated["createdAt"] == created["createdAt"]

    # Delete, then it is gone
    resp = await client.delete(f"/api/v1/{kind}/{entity_id}", headers=headers)
    assert resp.status_code == 204
    resp = await client.get(f"/api/v1/{kind}/{entity_id}", headers=headers)
    assert resp.status_code == 404
    resp = await client.delete(f"/api/v1/{kind}/{entity_id}", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_empty(client: AsyncClient):
    headers = await _tenant(client, "empty-list", ["employees", "teams"])
    resp = await client.get("/api/v1/teams", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_malformed_id_is_not_found(client: AsyncClient):
    headers = await _tenant(client, "bad-id", ["locations"])
    for method in ("get", "delete"):
        resp = await client.request(method.upper(), "/api/v1/locations/not-a-uuid", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Location not found"

    resp = await client.put("/api/v1/locations/not-a-uuid", json={"name": "x"}, headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_unknown_id_is_not_found(client: AsyncClient):
    headers = await _tenant(client, "unknown-id", ["departments"])
    resp = await client.get(f"/api/v1/departments/{uuid.uuid4()}", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Department not found"


@pytest.mark.asyncio
async def test_update_requires_fields(client: AsyncClient):
    headers = await _tenant(client, "empty-update", ["teams"])
    resp = await client.post("/api/v1/teams", json={"name": "Core"}, headers=headers)
    team_id = resp.json()["id"]

    resp = await client.put(f"/api/v1/teams/{team_id}", json={}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No fields to update"

    resp = await client.put(f"/api/v1/teams/{team_id}", json={"name": None}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "name"


@pytest.mark.asyncio
async def test_create_requires_name(client: AsyncClient):
    headers = await _tenant(client, "no-name", ["teams"])
    resp = await client.post("/api/v1/teams", json={}, headers=headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_client_tenant_id_is_ignored(client: AsyncClient):
    """A tenantId in the body never overrides the token's tenant."""
    headers_a = await _tenant(client, "ignore-a", ["locations"])
    headers_b = await _tenant(client, "ignore-b", ["locations"])
    tenant_b = (await client.get("/api/v1/tenants/me", headers=headers_b)).json()["id"]
    tenant_a = (await client.get("/api/v1/tenants/me", headers=headers_a)).json()["id"]

    resp = await client.post(
        "/api/v1/locations",
        json={"name": "Sneaky", "tenantId": tenant_b},
        headers=headers_a,
    )
    assert resp.status_code == 201
    assert resp.json()["tenantId"] == tenant_a

    resp = await client.get("/api/v1/locations", headers=headers_b)
    assert resp.json() == []


@pytest.mark.asyncio
async def test_cross_tenant_isolation(client: AsyncClient):
    """Tenant B can neither see nor change tenant A's records."""
    headers_a = await _tenant(client, "iso-a", ["managers"])
    headers_b = await _tenant(client, "iso-b", ["managers"])

    resp = await client.post(
        "/api/v1/managers", json={"name": "Alice", "email": "alice@a.test"}, headers=headers_a
    )
    manager_id = resp.json()["id"]

    resp = await client.get(f"/api/v1/managers/{manager_id}", headers=headers_b)
    assert resp.status_code == 404
    resp = await client.put(f"/api/v1/managers/{manager_id}", json={"name": "Mallory"}, headers=headers_b)
    assert resp.status_code == 404
    resp = await client.delete(f"/api/v1/managers/{manager_id}", headers=headers_b)
    assert resp.status_code == 404
    resp = await client.get("/api/v1/managers", headers=headers_b)
    assert resp.json() == []

    resp = await client.get(f"/api/v1/managers/{manager_id}", headers=headers_a)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice"


@pytest.mark.asyncio
async def test_module_not_enabled(client: AsyncClient):
    headers = await _tenant(client, "no-modules")  # employees only
    for kind in SAMPLES:
        resp = await client.get(f"/api/v1/{kind}", headers=headers)
        assert resp.status_code == 403, kind
        assert resp.json()["detail"] == "Access to this feature is not enabled for your account"


@pytest.mark.asyncio
async def test_module_check_runs_before_body_validation(client: AsyncClient):
    headers = await _tenant(client, "no-teams")
    resp = await client.post("/api/v1/teams", json={}, headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient):
    resp = await client.get("/api/v1/locations")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_delete_is_bound_to_its_kind(client: AsyncClient):
    """Deleting a hardware asset never touches an access level."""
    headers = await _tenant(client, "kind-bound", ["hardware-assets", "access-levels"])

    resp = await client.post("/api/v1/access-levels", json={"name": "Admin"}, headers=headers)
    access_level_id = resp.json()["id"]
    resp = await client.post("/api/v1/hardware-assets", json={"name": "Monitor"}, headers=headers)
    asset_id = resp.json()["id"]

    resp = await client.delete(f"/api/v1/hardware-assets/{access_level_id}", headers=headers)
    assert resp.status_code == 404
    resp = await client.delete(f"/api/v1/hardware-assets/{asset_id}", headers=headers)
    assert resp.status_code == 204

    resp = await client.get(f"/api/v1/access-levels/{access_level_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Admin"
