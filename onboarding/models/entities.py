"""Reference entities — the lookup records an Employee can point at.

All ten share ``id`` / ``tenant_id`` / ``name``; each adds its own columns.
Create schemas never carry ``tenant_id`` (it always comes from the token) and
update schemas are all-optional for partial merges.
"""

import uuid
from datetime import datetime

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from onboarding.models.base import CamelInput, CamelSchema, TenantOwned


class ReferenceEntity(TenantOwned):
    name: str = Field(max_length=255, nullable=False)


class EntityCreate(CamelInput):
    name: str = PydanticField(min_length=1, max_length=255)


class EntityUpdate(CamelInput):
    name: str | None = PydanticField(default=None, min_length=1, max_length=255)


class EntityRead(CamelSchema):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime


# ── Location ─────────────────────────────────────────────────

class Location(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "locations"

    address: str = Field(default="", max_length=500)
    postal_code: str = Field(default="", max_length=20)


class LocationCreate(EntityCreate):
    address: str = PydanticField(default="", max_length=500)
    postal_code: str = PydanticField(default="", max_length=20)


class LocationUpdate(EntityUpdate):
    address: str | None = PydanticField(default=None, max_length=500)
    postal_code: str | None = PydanticField(default=None, max_length=20)


class LocationRead(EntityRead):
    address: str
    postal_code: str


# ── Department ───────────────────────────────────────────────

class Department(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "departments"

    # Name of the department head
    head: str = Field(default="", max_length=255)


class DepartmentCreate(EntityCreate):
    head: str = PydanticField(default="", max_length=255)


class DepartmentUpdate(EntityUpdate):
    head: str | None = PydanticField(default=None, max_length=255)


class DepartmentRead(EntityRead):
    head: str


# ── Manager ──────────────────────────────────────────────────

class Manager(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "managers"

    email: str = Field(default="", max_length=320)


class ManagerCreate(EntityCreate):
    email: str = PydanticField(default="", max_length=320)


class ManagerUpdate(EntityUpdate):
    email: str | None = PydanticField(default=None, max_length=320)


class ManagerRead(EntityRead):
    email: str


# ── Job role ─────────────────────────────────────────────────

class JobRole(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "job_roles"

    description: str = Field(default="", max_length=2000)


class JobRoleCreate(EntityCreate):
    description: str = PydanticField(default="", max_length=2000)


class JobRoleUpdate(EntityUpdate):
    description: str | None = PydanticField(default=None, max_length=2000)


class JobRoleRead(EntityRead):
    description: str


# ── Employment type (e.g. "Full-Time") ───────────────────────

class EmploymentType(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "employment_types"


# ── Team ─────────────────────────────────────────────────────

class Team(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "teams"


# ── Cost center ──────────────────────────────────────────────

class CostCenter(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "cost_centers"

    # Accounting code, e.g. "ENG-101"
    code: str = Field(default="", max_length=50)


class CostCenterCreate(EntityCreate):
    code: str = PydanticField(default="", max_length=50)


class CostCenterUpdate(EntityUpdate):
    code: str | None = PydanticField(default=None, max_length=50)


class CostCenterRead(EntityRead):
    code: str


# ── Hardware asset ───────────────────────────────────────────

class HardwareAsset(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "hardware_assets"

    model_number: str = Field(default="", max_length=100)


class HardwareAssetCreate(EntityCreate):
    model_number: str = PydanticField(default="", max_length=100)


class HardwareAssetUpdate(EntityUpdate):
    model_number: str | None = PydanticField(default=None, max_length=100)


class HardwareAssetRead(EntityRead):
    model_number: str


# ── Onboarding buddy ─────────────────────────────────────────

class OnboardingBuddy(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "onboarding_buddies"

    team_id: uuid.UUID | None = Field(default=None, nullable=True)


class OnboardingBuddyCreate(EntityCreate):
    team_id: uuid.UUID | None = None


class OnboardingBuddyUpdate(EntityUpdate):
    team_id: uuid.UUID | None = None


class OnboardingBuddyRead(EntityRead):
    team_id: uuid.UUID | None = None


# ── Access level ─────────────────────────────────────────────

class AccessLevel(ReferenceEntity, SQLModel, table=True):
    __tablename__ = "access_levels"
