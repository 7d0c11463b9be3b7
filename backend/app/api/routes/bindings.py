"""Source binding routes."""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import DbSession, Identity
from app.schemas.base import SuccessResponse
from app.schemas.bindings import BindingCreate, BindingRead, BindingUpdate
from app.services import bindings as binding_service

router = APIRouter(tags=["bindings"])


@router.get("/workspaces/{workspace_id}/bindings", response_model=list[BindingRead])
async def list_bindings(workspace_id: UUID, identity: Identity, db: DbSession) -> list[BindingRead]:
    bindings = await binding_service.list_bindings(db, workspace_id, identity)
    return [BindingRead.model_validate(b) for b in bindings]


@router.post(
    "/workspaces/{workspace_id}/bindings",
    response_model=BindingRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_binding(
    workspace_id: UUID,
    data: BindingCreate,
    identity: Identity,
    db: DbSession,
) -> BindingRead:
    """
    Attach a data source to a workspace.

    The config shape depends on the binding type; declared keys are type
    checked, extra keys are stored as-is.
    """
    binding = await binding_service.create_binding(db, workspace_id, data, identity)
    return BindingRead.model_validate(binding)


@router.put("/bindings/{binding_id}", response_model=BindingRead)
async def update_binding(
    binding_id: UUID,
    data: BindingUpdate,
    identity: Identity,
    db: DbSession,
) -> BindingRead:
    binding = await binding_service.update_binding(db, binding_id, data, identity)
    return BindingRead.model_validate(binding)


@router.delete("/bindings/{binding_id}", response_model=SuccessResponse)
async def delete_binding(binding_id: UUID, identity: Identity, db: DbSession) -> SuccessResponse:
    """Detach a source together with its artifacts and their suggestions."""
    await binding_service.delete_binding(db, binding_id, identity)
    return SuccessResponse()
