"""Generic tenant-scoped repository over every entity kind.

One ``EntitySpec`` per kind names its collection and the schemas used to
(de)serialize it; ``EntityRepository`` runs the same five operations for
all of them. The tenant id is part of every store filter.
"""

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

from onboarding.core.errors import NotFoundError, ValidationError
from onboarding.models import (
    AccessLevel,
    CostCenter,
    Department,
    Employee,
    EmployeeRead,
    EmploymentType,
    HardwareAsset,
    JobRole,
    Location,
    Manager,
    OnboardingBuddy,
    Team,
)
from onboarding.models.base import CamelInput, CamelSchema, new_uuid, utcnow
from onboarding.models.entities import (
    CostCenterCreate,
    CostCenterRead,
    CostCenterUpdate,
    DepartmentCreate,
    DepartmentRead,
    DepartmentUpdate,
    EntityCreate,
    EntityRead,
    EntityUpdate,
    HardwareAssetCreate,
    HardwareAssetRead,
    HardwareAssetUpdate,
    JobRoleCreate,
    JobRoleRead,
    JobRoleUpdate,
    LocationCreate,
    LocationRead,
    LocationUpdate,
    ManagerCreate,
    ManagerRead,
    ManagerUpdate,
    OnboardingBuddyCreate,
    OnboardingBuddyRead,
    OnboardingBuddyUpdate,
)
from onboarding.services.document_store import DocumentStore, store_errors

logger = logging.getLogger(__name__)


class EntityKind(StrEnum):
    """Entity kinds; each value is also the module slug and URL segment."""

    EMPLOYEES = "employees"
    LOCATIONS = "locations"
    DEPARTMENTS = "departments"
    MANAGERS = "managers"
    JOB_ROLES = "job-roles"
    EMPLOYMENT_TYPES = "employment-types"
    TEAMS = "teams"
    COST_CENTERS = "cost-centers"
    HARDWARE_ASSETS = "hardware-assets"
    ONBOARDING_BUDDIES = "onboarding-buddies"
    ACCESS_LEVELS = "access-levels"


@dataclass(frozen=True)
class EntitySpec:
    kind: EntityKind
    label: str
    model: type[SQLModel]
    read_schema: type[CamelSchema]
    create_schema: type[CamelInput] | None = None
    update_schema: type[CamelInput] | None = None

    @property
    def collection(self) -> str:
        return self.model.__tablename__

    def to_read(self, doc: Mapping[str, Any]) -> CamelSchema:
        return self.read_schema.model_validate(doc)


_REFERENCE_SPECS = (
    EntitySpec(EntityKind.LOCATIONS, "Location", Location, LocationRead, LocationCreate, LocationUpdate),
    EntitySpec(EntityKind.DEPARTMENTS, "Department", Department, DepartmentRead, DepartmentCreate, DepartmentUpdate),
    EntitySpec(EntityKind.MANAGERS, "Manager", Manager, ManagerRead, ManagerCreate, ManagerUpdate),
    EntitySpec(EntityKind.JOB_ROLES, "Job role", JobRole, JobRoleRead, JobRoleCreate, JobRoleUpdate),
    EntitySpec(EntityKind.EMPLOYMENT_TYPES, "Employment type", EmploymentType, EntityRead, EntityCreate, EntityUpdate),
    EntitySpec(EntityKind.TEAMS, "Team", Team, EntityRead, EntityCreate, EntityUpdate),
    EntitySpec(EntityKind.COST_CENTERS, "Cost center", CostCenter, CostCenterRead, CostCenterCreate, CostCenterUpdate),
    EntitySpec(
        EntityKind.HARDWARE_ASSETS, "Hardware asset", HardwareAsset,
        HardwareAssetRead, HardwareAssetCreate, HardwareAssetUpdate,
    ),
    EntitySpec(
        EntityKind.ONBOARDING_BUDDIES, "Onboarding buddy", OnboardingBuddy,
        OnboardingBuddyRead, OnboardingBuddyCreate, OnboardingBuddyUpdate,
    ),
    EntitySpec(EntityKind.ACCESS_LEVELS, "Access level", AccessLevel, EntityRead, EntityCreate, EntityUpdate),
)

REFERENCE_ENTITIES: dict[EntityKind, EntitySpec] = {spec.kind: spec for spec in _REFERENCE_SPECS}

# Employee bodies are validated per tenant, so there is no static create/update schema
EMPLOYEE_SPEC = EntitySpec(EntityKind.EMPLOYEES, "Employee", Employee, EmployeeRead)

ENTITY_SPECS: dict[EntityKind, EntitySpec] = {EntityKind.EMPLOYEES: EMPLOYEE_SPEC, **REFERENCE_ENTITIES}

# Columns no create or update may set from the caller's data
_SYSTEM_FIELDS = frozenset({"id", "tenant_id", "created_at", "updated_at"})


def get_spec(kind: EntityKind | str) -> EntitySpec:
    try:
        return ENTITY_SPECS[EntityKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown entity kind '{kind}'") from None


def parse_entity_id(raw: uuid.UUID | str, label: str = "Entity") -> uuid.UUID:
    """Malformed ids are reported exactly like absent ones."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFoundError(f"{label} not found") from None


class EntityRepository:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def create(
        self,
        kind: EntityKind | str,
        tenant_id: uuid.UUID,
        data: Mapping[str, Any],
    ) -> CamelSchema:
        spec = get_spec(kind)
        now = utcnow()
        doc = {key: value for key, value in data.items() if key not in _SYSTEM_FIELDS}
        doc.update(id=new_uuid(), tenant_id=tenant_id, created_at=now, updated_at=now)

        with store_errors():
            await self._store.insert(spec.collection, doc)
        logger.info(
            "Created %s %s", spec.kind, doc["id"],
            extra={"tenant_id": tenant_id, "kind": spec.kind},
        )
        return await self.get_by_id(spec.kind, tenant_id, doc["id"])

    async def list_by_tenant(self, kind: EntityKind | str, tenant_id: uuid.UUID) -> list[CamelSchema]:
        spec = get_spec(kind)
        with store_errors():
            docs = await self._store.find_many(spec.collection, {"tenant_id": tenant_id})
        return [spec.to_read(doc) for doc in docs]

    async def get_by_id(
        self,
        kind: EntityKind | str,
        tenant_id: uuid.UUID,
        entity_id: uuid.UUID | str,
    ) -> CamelSchema:
        spec = get_spec(kind)
        filter = {"id": parse_entity_id(entity_id, spec.label), "tenant_id": tenant_id}
        with store_errors():
            doc = await self._store.find_one(spec.collection, filter)
        if doc is None:
            raise NotFoundError(f"{spec.label} not found")
        return spec.to_read(doc)

    async def update(
        self,
        kind: EntityKind | str,
        tenant_id: uuid.UUID,
        entity_id: uuid.UUID | str,
        fields: Mapping[str, Any],
    ) -> None:
        """Partial merge: only the supplied fields change."""
        spec = get_spec(kind)
        filter = {"id": parse_entity_id(entity_id, spec.label), "tenant_id": tenant_id}

        partial = {key: value for key, value in fields.items() if key not in _SYSTEM_FIELDS}
        if not partial:
            raise ValidationError("No fields to update")
        columns = spec.model.__table__.c
        for key, value in partial.items():
            if value is None and key in columns and not columns[key].nullable:
                raise ValidationError(f"{to_camel(key)} cannot be null", field=to_camel(key))
        partial["updated_at"] = utcnow()

        with store_errors():
            matched = await self._store.update_one(spec.collection, filter, partial)
        if matched == 0:
            raise NotFoundError(f"{spec.label} not found")

    async def delete(
        self,
        kind: EntityKind | str,
        tenant_id: uuid.UUID,
        entity_id: uuid.UUID | str,
    ) -> None:
        spec = get_spec(kind)
        filter = {"id": parse_entity_id(entity_id, spec.label), "tenant_id": tenant_id}
        with store_errors():
            deleted = await self._store.delete_one(spec.collection, filter)
        if deleted == 0:
            raise NotFoundError(f"{spec.label} not found")
        logger.info(
            "Deleted %s %s", spec.kind, filter["id"],
            extra={"tenant_id": tenant_id, "kind": spec.kind},
        )
