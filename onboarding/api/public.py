"""Public (unauthenticated) endpoints — tenant signup."""

import uuid

from fastapi import APIRouter, status
from pydantic import Field

from onboarding.api.deps import Store
from onboarding.models import TenantRead, UserRead
from onboarding.models.base import CamelInput, CamelSchema
from onboarding.services import accounts

router = APIRouter(prefix="/public", tags=["public"])


class SignupRequest(CamelInput):
    """Everything needed to create a new tenant + admin in one call."""
    company_name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=8, max_length=128)
    enabled_modules: list[str] | None = Field(
        default=None,
        description="Module slugs to enable; defaults to employees only",
    )


class SignupResponse(CamelSchema):
    message: str = "Account created successfully. Please log in."
    tenant_id: uuid.UUID
    admin_user_id: uuid.UUID
    tenant: TenantRead
    user: UserRead


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new tenant and its admin user",
)
async def signup(body: SignupRequest, store: Store) -> SignupResponse:
    """Create a tenant and its first admin user.

    This is the only unauthenticated write endpoint. A duplicate username
    returns 409 and leaves no tenant behind.
    """
    tenant, user = await accounts.signup(
        store,
        company_name=body.company_name,
        username=body.username,
        password=body.password,
        enabled_modules=body.enabled_modules,
    )
    return SignupResponse(tenant_id=tenant.id, admin_user_id=user.id, tenant=tenant, user=user)
