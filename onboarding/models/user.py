"""User model — belongs to a tenant; usernames are unique across tenants."""

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from onboarding.models.base import CamelInput, CamelSchema, TimestampMixin, new_uuid


class UserRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    username: str = Field(max_length=150, nullable=False, unique=True, index=True)
    password_hash: str = Field(nullable=False)
    role: str = Field(default=UserRole.MEMBER, max_length=20)


# ── Pydantic schemas ─────────────────────────────────────────

class UserCreate(CamelInput):
    username: str = PydanticField(min_length=1, max_length=150)
    password: str = PydanticField(min_length=8, max_length=128)
    role: UserRole = UserRole.MEMBER


class UserRead(CamelSchema):
    """Never includes the password hash."""
    id: uuid.UUID
    tenant_id: uuid.UUID
    username: str
    role: UserRole
    created_at: datetime
