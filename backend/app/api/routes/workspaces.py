"""Workspace CRUD routes."""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import DbSession, Identity
from app.schemas.workspaces import (
    WorkspaceCreate,
    WorkspaceDetail,
    WorkspaceRead,
    WorkspaceSummary,
    WorkspaceUpdate,
)
from app.services import workspaces as workspace_service

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("", response_model=list[WorkspaceSummary])
async def list_workspaces(identity: Identity, db: DbSession) -> list[WorkspaceSummary]:
    """
    List workspaces visible to the caller, most recently updated first.

    Anonymous callers only see public workspaces.
    """
    return await workspace_service.list_workspaces(db, identity)


@router.post("", response_model=WorkspaceRead, status_code=status.HTTP_201_CREATED)
async def create_workspace(data: WorkspaceCreate, identity: Identity, db: DbSession) -> WorkspaceRead:
    """Create a workspace. It is owned by the caller when signed in, public otherwise."""
    workspace = await workspace_service.create_workspace(db, data, identity)
    return WorkspaceRead.model_validate(workspace)


@router.get("/{workspace_id}", response_model=WorkspaceDetail)
async def get_workspace(workspace_id: UUID, identity: Identity, db: DbSession) -> WorkspaceDetail:
    """Get a workspace with its bindings, artifacts and suggestions."""
    return await workspace_service.get_workspace_detail(db, workspace_id, identity)


@router.put("/{workspace_id}", response_model=WorkspaceRead)
async def update_workspace(
    workspace_id: UUID,
    data: WorkspaceUpdate,
    identity: Identity,
    db: DbSession,
) -> WorkspaceRead:
    workspace = await workspace_service.update_workspace(db, workspace_id, data, identity)
    return WorkspaceRead.model_validate(workspace)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(workspace_id: UUID, identity: Identity, db: DbSession) -> None:
    """Delete a workspace and everything under it."""
    await workspace_service.delete_workspace(db, workspace_id, identity)
