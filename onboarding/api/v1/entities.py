"""Reference entity CRUD — one router per kind, built from the entity registry.

Every route of a router is bound to that router's own kind, and every route
requires the matching module to be enabled for the caller's tenant.
"""

from fastapi import APIRouter, Depends, status

from onboarding.api.deps import Auth, Repository, require_module
from onboarding.services.entities import REFERENCE_ENTITIES, EntitySpec


def build_entity_router(spec: EntitySpec) -> APIRouter:
    kind = spec.kind
    create_schema = spec.create_schema
    update_schema = spec.update_schema
    read_schema = spec.read_schema

    router = APIRouter(
        prefix=f"/{kind}",
        tags=[kind],
        dependencies=[Depends(require_module(kind))],
    )

    @router.post(
        "",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {spec.label.lower()}",
    )
    async def create_entity(body: create_schema, auth: Auth, repo: Repository):
        return await repo.create(kind, auth.tenant_id, body.model_dump())

    @router.get("", response_model=list[read_schema], summary=f"List {kind}")
    async def list_entities(auth: Auth, repo: Repository):
        return await repo.list_by_tenant(kind, auth.tenant_id)

    @router.get("/{entity_id}", response_model=read_schema)
    async def get_entity(entity_id: str, auth: Auth, repo: Repository):
        return await repo.get_by_id(kind, auth.tenant_id, entity_id)

    @router.put("/{entity_id}", response_model=read_schema)
    async def update_entity(entity_id: str, body: update_schema, auth: Auth, repo: Repository):
        await repo.update(kind, auth.tenant_id, entity_id, body.model_dump(exclude_unset=True))
        return await repo.get_by_id(kind, auth.tenant_id, entity_id)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(entity_id: str, auth: Auth, repo: Repository) -> None:
        await repo.delete(kind, auth.tenant_id, entity_id)

    return router


entity_routers: list[APIRouter] = [build_entity_router(spec) for spec in REFERENCE_ENTITIES.values()]
