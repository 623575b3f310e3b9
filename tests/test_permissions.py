"""Tests for the tenant permission resolver and module management."""

import uuid

import pytest
from httpx import AsyncClient

from onboarding.core.errors import InternalError, PermissionDeniedError, ValidationError
from onboarding.services.document_store import DocumentStore, StoreUnavailableError
from onboarding.services.permissions import (
    DEFAULT_MODULES,
    MODULE_SLUGS,
    TenantPermissionResolver,
    normalize_modules,
)


async def _make_tenant(store: DocumentStore, modules: list[str]) -> uuid.UUID:
    return await store.insert("tenants", {"name": "Perm Co", "enabled_modules": modules})


def test_module_vocabulary():
    assert DEFAULT_MODULES == ("employees",)
    assert len(MODULE_SLUGS) == 11
    assert "job-roles" in MODULE_SLUGS


def test_normalize_modules_dedupes_in_order():
    assert normalize_modules(["teams", "employees", "teams"]) == ["teams", "employees"]
    assert normalize_modules([]) == []


def test_normalize_modules_rejects_unknown():
    with pytest.raises(ValidationError) as exc_info:
        normalize_modules(["employees", "payroll", "job_roles"])
    assert exc_info.value.extra == {"unknownModules": ["payroll", "job_roles"]}


@pytest.mark.asyncio
async def test_is_enabled_and_require(store: DocumentStore):
    tenant_id = await _make_tenant(store, ["employees", "locations"])
    resolver = TenantPermissionResolver(store)

    assert await resolver.is_enabled(tenant_id, "locations") is True
    assert await resolver.is_enabled(tenant_id, "teams") is False
    assert await resolver.require(tenant_id, "employees") == ["employees", "locations"]
    with pytest.raises(PermissionDeniedError):
        await resolver.require(tenant_id, "teams")


@pytest.mark.asyncio
async def test_missing_tenant_is_internal_error(store: DocumentStore):
    resolver = TenantPermissionResolver(store)
    with pytest.raises(InternalError, match="Could not verify tenant permissions"):
        await resolver.is_enabled(uuid.uuid4(), "employees")


@pytest.mark.asyncio
async def test_store_failure_is_internal_error(store: DocumentStore, monkeypatch):
    async def unavailable(*args, **kwargs):
        raise StoreUnavailableError("down")

    monkeypatch.setattr(store, "find_one", unavailable)
    resolver = TenantPermissionResolver(store)
    with pytest.raises(InternalError):
        await resolver.require(uuid.uuid4(), "employees")


@pytest.mark.asyncio
async def test_set_enabled_modules(store: DocumentStore):
    tenant_id = await _make_tenant(store, ["employees"])
    resolver = TenantPermissionResolver(store)

    modules = await resolver.set_enabled_modules(tenant_id, ["employees", "teams", "teams"])
    assert modules == ["employees", "teams"]
    assert await resolver.enabled_modules(tenant_id) == ["employees", "teams"]

    with pytest.raises(ValidationError):
        await resolver.set_enabled_modules(tenant_id, ["nope"])
    assert await resolver.enabled_modules(tenant_id) == ["employees", "teams"]

    with pytest.raises(InternalError):
        await resolver.set_enabled_modules(uuid.uuid4(), ["employees"])


# ── HTTP ─────────────────────────────────────────────────────

async def _signup(client: AsyncClient, username: str) -> dict:
    resp = await client.post("/public/signup", json={
        "companyName": "Toggle Co",
        "username": username,
        "password": "testpass123",
    })
    assert resp.status_code == 201
    resp = await client.post("/auth/login", json={"username": username, "password": "testpass123"})
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.mark.asyncio
async def test_toggle_modules_takes_effect_immediately(client: AsyncClient):
    headers = await _signup(client, "toggle-admin")

    resp = await client.get("/api/v1/teams", headers=headers)
    assert resp.status_code == 403

    resp = await client.put(
        "/api/v1/tenants/me/modules",
        json={"enabledModules": ["employees", "teams"]},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["enabledModules"] == ["employees", "teams"]

    resp = await client.get("/api/v1/teams", headers=headers)
    assert resp.status_code == 200

    resp = await client.put(
        "/api/v1/tenants/me/modules", json={"enabledModules": ["employees"]}, headers=headers
    )
    assert resp.status_code == 200
    resp = await client.get("/api/v1/teams", headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_toggle_modules_unknown_slug(client: AsyncClient):
    headers = await _signup(client, "toggle-typo")
    resp = await client.put(
        "/api/v1/tenants/me/modules", json={"enabledModules": ["employee"]}, headers=headers
    )
    assert resp.status_code == 400
    assert resp.json()["unknownModules"] == ["employee"]


@pytest.mark.asyncio
async def test_member_cannot_toggle_modules(client: AsyncClient):
    headers = await _signup(client, "toggle-owner")
    await client.post(
        "/api/v1/users",
        json={"username": "toggle-member", "password": "password123"},
        headers=headers,
    )
    resp = await client.post(
        "/auth/login", json={"username": "toggle-member", "password": "password123"}
    )
    member_headers = {"Authorization": f"Bearer {resp.json()['accessToken']}"}

    resp = await client.put(
        "/api/v1/tenants/me/modules", json={"enabledModules": ["teams"]}, headers=member_headers
    )
    assert resp.status_code == 403
