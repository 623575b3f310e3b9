"""Import all models so SQLModel.metadata picks them up."""

from onboarding.models.employee import Employee, EmployeeRead
from onboarding.models.entities import (
    AccessLevel,
    CostCenter,
    Department,
    EmploymentType,
    HardwareAsset,
    JobRole,
    Location,
    Manager,
    OnboardingBuddy,
    Team,
)
from onboarding.models.tenant import Tenant, TenantModulesUpdate, TenantRead, TenantStatus
from onboarding.models.user import User, UserCreate, UserRead, UserRole

__all__ = [
    "AccessLevel",
    "CostCenter",
    "Department",
    "Employee",
    "EmployeeRead",
    "EmploymentType",
    "HardwareAsset",
    "JobRole",
    "Location",
    "Manager",
    "OnboardingBuddy",
    "Team",
    "Tenant",
    "TenantModulesUpdate",
    "TenantRead",
    "TenantStatus",
    "User",
    "UserCreate",
    "UserRead",
    "UserRole",
]
