"""V1 API router aggregation — every route here requires a bearer token."""

from fastapi import APIRouter

from onboarding.api.v1.employees import router as employees_router
from onboarding.api.v1.entities import entity_routers
from onboarding.api.v1.tenants import router as tenants_router
from onboarding.api.v1.users import router as users_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(tenants_router)
v1_router.include_router(users_router)
v1_router.include_router(employees_router)
for entity_router in entity_routers:
    v1_router.include_router(entity_router)
