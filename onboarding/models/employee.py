"""Employee model — the record being onboarded.

Reference columns hold the id of a row in the matching reference-entity
table. Which of them are mandatory depends on the tenant's enabled modules,
so request bodies are validated by ``services.employee_validation`` rather
than a static schema.
"""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from onboarding.models.base import CamelSchema, TenantOwned


class Employee(TenantOwned, SQLModel, table=True):
    __tablename__ = "employees"

    first_name: str = Field(max_length=255, nullable=False)
    last_name: str = Field(max_length=255, nullable=False)
    email: str = Field(max_length=320, nullable=False)
    phone_number: str = Field(default="", max_length=50)
    onboarding_date: datetime = Field(nullable=False)

    location_id: uuid.UUID | None = Field(default=None, nullable=True)
    department_id: uuid.UUID | None = Field(default=None, nullable=True)
    manager_id: uuid.UUID | None = Field(default=None, nullable=True)
    job_role_id: uuid.UUID | None = Field(default=None, nullable=True)
    employment_type_id: uuid.UUID | None = Field(default=None, nullable=True)
    team_id: uuid.UUID | None = Field(default=None, nullable=True)
    cost_center_id: uuid.UUID | None = Field(default=None, nullable=True)
    hardware_asset_id: uuid.UUID | None = Field(default=None, nullable=True)
    onboarding_buddy_id: uuid.UUID | None = Field(default=None, nullable=True)
    access_level_id: uuid.UUID | None = Field(default=None, nullable=True)


# ── Pydantic schemas ─────────────────────────────────────────

class EmployeeRead(CamelSchema):
    id: uuid.UUID
    tenant_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone_number: str
    onboarding_date: datetime

    location_id: uuid.UUID | None = None
    department_id: uuid.UUID | None = None
    manager_id: uuid.UUID | None = None
    job_role_id: uuid.UUID | None = None
    employment_type_id: uuid.UUID | None = None
    team_id: uuid.UUID | None = None
    cost_center_id: uuid.UUID | None = None
    hardware_asset_id: uuid.UUID | None = None
    onboarding_buddy_id: uuid.UUID | None = None
    access_level_id: uuid.UUID | None = None

    created_at: datetime
    updated_at: datetime
