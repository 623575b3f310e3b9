"""Employee CRUD — required reference fields follow the tenant's modules."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from onboarding.api.deps import Auth, Repository, require_module
from onboarding.models import EmployeeRead
from onboarding.services.employee_validation import (
    validate_employee_update,
    validate_new_employee,
)
from onboarding.services.entities import EntityKind

employees_enabled = require_module(EntityKind.EMPLOYEES)
EnabledModules = Annotated[list[str], Depends(employees_enabled)]

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    dependencies=[Depends(employees_enabled)],
)


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: Annotated[Any, Body()],
    auth: Auth,
    modules: EnabledModules,
    repo: Repository,
) -> EmployeeRead:
    """Reports every missing required field at once, before any coercion."""
    doc = validate_new_employee(payload, modules)
    return await repo.create(EntityKind.EMPLOYEES, auth.tenant_id, doc)


@router.get("", response_model=list[EmployeeRead])
async def list_employees(auth: Auth, repo: Repository) -> list[EmployeeRead]:
    return await repo.list_by_tenant(EntityKind.EMPLOYEES, auth.tenant_id)


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(employee_id: str, auth: Auth, repo: Repository) -> EmployeeRead:
    return await repo.get_by_id(EntityKind.EMPLOYEES, auth.tenant_id, employee_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: str,
    payload: Annotated[Any, Body()],
    auth: Auth,
    modules: EnabledModules,
    repo: Repository,
) -> EmployeeRead:
    fields = validate_employee_update(payload, modules)
    await repo.update(EntityKind.EMPLOYEES, auth.tenant_id, employee_id, fields)
    return await repo.get_by_id(EntityKind.EMPLOYEES, auth.tenant_id, employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: str, auth: Auth, repo: Repository) -> None:
    await repo.delete(EntityKind.EMPLOYEES, auth.tenant_id, employee_id)
