"""Tenant signup, login and tenant user management."""

import logging
import uuid
from collections.abc import Iterable

from onboarding.core.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
)
from onboarding.core.security import hash_password, verify_password
from onboarding.models import TenantRead, TenantStatus, UserRead, UserRole
from onboarding.models.base import new_uuid, utcnow
from onboarding.services.document_store import (
    DocumentStore,
    DuplicateKeyError,
    StoreError,
    store_errors,
)
from onboarding.services.permissions import DEFAULT_MODULES, normalize_modules

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists"


async def signup(
    store: DocumentStore,
    company_name: str,
    username: str,
    password: str,
    enabled_modules: Iterable[str] | None = None,
) -> tuple[TenantRead, UserRead]:
    """Create a tenant and its first admin user.

    The two inserts are not atomic. If the user insert fails the tenant is
    deleted again and one error is raised; if that delete also fails the
    tenant is left behind and the failure is logged.
    """
    modules = normalize_modules(DEFAULT_MODULES if enabled_modules is None else enabled_modules)

    # 1. Create tenant
    now = utcnow()
    tenant_id = new_uuid()
    try:
        await store.insert("tenants", {
            "id": tenant_id,
            "name": company_name,
            "status": TenantStatus.ACTIVE,
            "enabled_modules": modules,
            "created_at": now,
            "updated_at": now,
        })
    except StoreError as exc:
        raise InternalError("Failed to create tenant") from exc

    # 2. Create admin user
    user_id = new_uuid()
    try:
        await store.insert("users", {
            "id": user_id,
            "tenant_id": tenant_id,
            "username": username,
            "password_hash": hash_password(password),
            "role": UserRole.ADMIN,
            "created_at": now,
            "updated_at": now,
        })
    except DuplicateKeyError as exc:
        await _remove_tenant(store, tenant_id)
        raise ConflictError(USERNAME_TAKEN) from exc
    except Exception as exc:
        logger.exception("Admin user creation failed for tenant %s", tenant_id)
        await _remove_tenant(store, tenant_id)
        raise InternalError("Failed to create admin user") from exc

    logger.info("Signed up tenant %s with admin %s", tenant_id, user_id)
    return await get_tenant(store, tenant_id), await get_user(store, tenant_id, user_id)


async def _remove_tenant(store: DocumentStore, tenant_id: uuid.UUID) -> None:
    try:
        await store.delete_one("tenants", {"id": tenant_id})
    except StoreError as exc:
        logger.error("Compensating delete failed; tenant %s is orphaned", tenant_id, exc_info=exc)
        raise InternalError("Signup failed and cleanup did not complete") from exc


async def authenticate(
    store: DocumentStore, username: str, password: str
) -> tuple[UserRead, TenantRead]:
    """Same error for an unknown username and a wrong password."""
    with store_errors():
        user = await store.find_one("users", {"username": username})
    if user is None or not verify_password(password, user["password_hash"]):
        raise AuthenticationError("Invalid username or password")

    with store_errors():
        tenant = await store.find_one("tenants", {"id": user["tenant_id"]})
    if tenant is None:
        logger.error("User %s belongs to missing tenant %s", user["id"], user["tenant_id"])
        raise InternalError("Could not retrieve tenant information")
    if tenant["status"] == TenantStatus.SUSPENDED:
        raise PermissionDeniedError("Tenant is suspended")

    return UserRead.model_validate(user), TenantRead.model_validate(tenant)


async def get_tenant(store: DocumentStore, tenant_id: uuid.UUID) -> TenantRead:
    with store_errors():
        tenant = await store.find_one("tenants", {"id": tenant_id})
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return TenantRead.model_validate(tenant)


async def get_user(store: DocumentStore, tenant_id: uuid.UUID, user_id: uuid.UUID) -> UserRead:
    with store_errors():
        user = await store.find_one("users", {"id": user_id, "tenant_id": tenant_id})
    if user is None:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)


async def create_user(
    store: DocumentStore,
    tenant_id: uuid.UUID,
    username: str,
    password: str,
    role: UserRole,
) -> UserRead:
    now = utcnow()
    user_id = new_uuid()
    with store_errors(conflict_detail=USERNAME_TAKEN):
        await store.insert("users", {
            "id": user_id,
            "tenant_id": tenant_id,
            "username": username,
            "password_hash": hash_password(password),
            "role": role,
            "created_at": now,
            "updated_at": now,
        })
    logger.info("Created %s user %s", role, user_id, extra={"tenant_id": tenant_id})
    return await get_user(store, tenant_id, user_id)


async def list_users(store: DocumentStore, tenant_id: uuid.UUID) -> list[UserRead]:
    with store_errors():
        users = await store.find_many("users", {"tenant_id": tenant_id})
    return [UserRead.model_validate(user) for user in users]
