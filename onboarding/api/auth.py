"""Authentication endpoints — login + current user."""

from fastapi import APIRouter
from pydantic import Field

from onboarding.api.deps import Auth, Store
from onboarding.core.security import issue_token
from onboarding.models import TenantRead, UserRead
from onboarding.models.base import CamelInput, CamelSchema
from onboarding.services import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Schemas ──────────────────────────────────────────────────

class LoginRequest(CamelInput):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(CamelSchema):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
    tenant: TenantRead


class MeResponse(CamelSchema):
    user: UserRead
    tenant: TenantRead


# ── Routes ───────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, store: Store) -> LoginResponse:
    """Authenticate with username + password, receive a JWT."""
    user, tenant = await accounts.authenticate(store, body.username, body.password)
    token = issue_token(user.id, user.tenant_id)
    return LoginResponse(access_token=token, user=user, tenant=tenant)


@router.get("/me", response_model=MeResponse)
async def get_me(auth: Auth, store: Store) -> MeResponse:
    """Return the current authenticated user and their tenant."""
    user = await accounts.get_user(store, auth.tenant_id, auth.user_id)
    tenant = await accounts.get_tenant(store, auth.tenant_id)
    return MeResponse(user=user, tenant=tenant)
