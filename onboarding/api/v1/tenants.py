"""Current tenant info and module management."""

from fastapi import APIRouter

from onboarding.api.deps import Admin, Auth, Permissions, Store
from onboarding.models import TenantModulesUpdate, TenantRead
from onboarding.services import accounts

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("/me", response_model=TenantRead, summary="Get current tenant info")
async def get_current_tenant(auth: Auth, store: Store) -> TenantRead:
    """Returns the tenant associated with the authenticated token."""
    return await accounts.get_tenant(store, auth.tenant_id)


@router.put("/me/modules", response_model=TenantRead, summary="Replace enabled modules")
async def update_enabled_modules(
    body: TenantModulesUpdate,
    admin: Admin,
    permissions: Permissions,
    store: Store,
) -> TenantRead:
    """Takes effect on the next request; nothing is cached."""
    await permissions.set_enabled_modules(admin.tenant_id, body.enabled_modules)
    return await accounts.get_tenant(store, admin.tenant_id)
