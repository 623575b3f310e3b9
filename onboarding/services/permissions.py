"""Tenant permission resolver — which entity modules a tenant has enabled.

The tenant record is read fresh on every check; there is no cache, so a
module toggled by an admin takes effect on the very next request.
"""

import logging
import uuid
from collections.abc import Iterable

from onboarding.core.errors import InternalError, PermissionDeniedError, ValidationError
from onboarding.models.base import utcnow
from onboarding.services.document_store import DocumentStore, StoreError, store_errors
from onboarding.services.entities import EntityKind

logger = logging.getLogger(__name__)

MODULE_SLUGS: tuple[str, ...] = tuple(kind.value for kind in EntityKind)

# Enabled at signup when the caller does not choose
DEFAULT_MODULES: tuple[str, ...] = (EntityKind.EMPLOYEES.value,)


def normalize_modules(slugs: Iterable[str]) -> list[str]:
    """Validate against the vocabulary and drop duplicates, keeping order."""
    slugs = list(slugs)
    unknown = [slug for slug in slugs if slug not in MODULE_SLUGS]
    if unknown:
        raise ValidationError("Unknown entity modules", unknownModules=unknown)
    return list(dict.fromkeys(slugs))


class TenantPermissionResolver:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def enabled_modules(self, tenant_id: uuid.UUID) -> list[str]:
        """Raises InternalError when the tenant record cannot be loaded."""
        try:
            tenant = await self._store.find_one("tenants", {"id": tenant_id})
        except StoreError as exc:
            raise InternalError("Could not verify tenant permissions") from exc
        if tenant is None:
            logger.error("Tenant %s referenced by a valid token does not exist", tenant_id)
            raise InternalError("Could not verify tenant permissions")
        return list(tenant["enabled_modules"] or [])

    async def is_enabled(self, tenant_id: uuid.UUID, slug: str) -> bool:
        return slug in await self.enabled_modules(tenant_id)

    async def require(self, tenant_id: uuid.UUID, slug: str) -> list[str]:
        """Deny unless ``slug`` is enabled; returns the full enabled list."""
        modules = await self.enabled_modules(tenant_id)
        if slug not in modules:
            raise PermissionDeniedError()
        return modules

    async def set_enabled_modules(self, tenant_id: uuid.UUID, slugs: Iterable[str]) -> list[str]:
        modules = normalize_modules(slugs)
        with store_errors():
            matched = await self._store.update_one(
                "tenants", {"id": tenant_id}, {"enabled_modules": modules, "updated_at": utcnow()}
            )
        if matched == 0:
            raise InternalError("Could not update tenant permissions")
        logger.info("Tenant %s enabled modules: %s", tenant_id, ", ".join(modules))
        return modules
