"""Users — tenant-scoped; only admins may add users."""

from fastapi import APIRouter, status

from onboarding.api.deps import Admin, Auth, Store
from onboarding.models import UserCreate, UserRead
from onboarding.services import accounts

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    admin: Admin,
    store: Store,
) -> UserRead:
    """Create a user in the caller's tenant. Usernames are unique across tenants."""
    return await accounts.create_user(
        store,
        tenant_id=admin.tenant_id,
        username=body.username,
        password=body.password,
        role=body.role,
    )


@router.get("", response_model=list[UserRead])
async def list_users(auth: Auth, store: Store) -> list[UserRead]:
    return await accounts.list_users(store, auth.tenant_id)
