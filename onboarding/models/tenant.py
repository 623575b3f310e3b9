"""Tenant model — top-level isolation boundary."""

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import Field as PydanticField
from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

from onboarding.models.base import CamelInput, CamelSchema, TimestampMixin, new_uuid


class TenantStatus(StrEnum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TRIAL = "trial"


class Tenant(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    status: str = Field(default=TenantStatus.ACTIVE, max_length=20)

    # Module slugs, in the order the tenant enabled them
    enabled_modules: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )


# ── Pydantic schemas ─────────────────────────────────────────

class TenantRead(CamelSchema):
    id: uuid.UUID
    name: str
    status: TenantStatus
    enabled_modules: list[str]
    created_at: datetime


class TenantModulesUpdate(CamelInput):
    enabled_modules: list[str] = PydanticField(default_factory=list)
