"""FastAPI dependencies for authentication, tenant permissions and services."""

import uuid
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.config import get_settings
from onboarding.core.database import get_session
from onboarding.core.errors import AuthenticationError, NotFoundError, PermissionDeniedError
from onboarding.core.security import verify_token
from onboarding.models import UserRead, UserRole
from onboarding.services import accounts
from onboarding.services.document_store import DocumentStore
from onboarding.services.entities import EntityRepository
from onboarding.services.permissions import TenantPermissionResolver

# auto_error=False so a missing header is a 401 from our handler, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


class AuthContext:
    """Resolved identity carried through a request."""

    __slots__ = ("tenant_id", "user_id")

    def __init__(self, tenant_id: uuid.UUID, user_id: uuid.UUID) -> None:
        self.tenant_id = tenant_id
        self.user_id = user_id


async def get_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DocumentStore:
    return DocumentStore(session, timeout=get_settings().store_timeout_seconds)


Store = Annotated[DocumentStore, Depends(get_store)]


def get_repository(store: Store) -> EntityRepository:
    return EntityRepository(store)


def get_permissions(store: Store) -> TenantPermissionResolver:
    return TenantPermissionResolver(store)


Repository = Annotated[EntityRepository, Depends(get_repository)]
Permissions = Annotated[TenantPermissionResolver, Depends(get_permissions)]


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthContext:
    """Resolve a ``Bearer <jwt>`` header to the caller's user and tenant."""
    if credentials is None:
        raise AuthenticationError("Authorization header is required")
    claims = verify_token(credentials.credentials)
    return AuthContext(tenant_id=claims.tenant_id, user_id=claims.user_id)


Auth = Annotated[AuthContext, Depends(get_auth_context)]


def require_module(slug: str) -> Callable[..., Awaitable[list[str]]]:
    """Dependency factory: 403 unless the tenant has ``slug`` enabled.

    The dependency's value is the tenant's full enabled-module list.
    """

    async def _require_module(auth: Auth, permissions: Permissions) -> list[str]:
        return await permissions.require(auth.tenant_id, slug)

    _require_module.__name__ = f"require_module_{slug.replace('-', '_')}"
    return _require_module


async def require_admin(auth: Auth, store: Store) -> UserRead:
    """The role is read from the user record, not trusted from the token."""
    try:
        user = await accounts.get_user(store, auth.tenant_id, auth.user_id)
    except NotFoundError:
        raise AuthenticationError("Token owner no longer exists") from None
    if user.role != UserRole.ADMIN:
        raise PermissionDeniedError("Only admins can manage users")
    return user


Admin = Annotated[UserRead, Depends(require_admin)]
