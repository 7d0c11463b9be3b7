"""
Workspace CRUD.

Listing is scoped by identity: anonymous callers see public workspaces,
signed-in users see public ones plus their own. Everything else goes through
the ownership policy in app.services.access.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Artifact, SourceBinding, User, Workspace
from app.schemas.artifacts import ArtifactRead
from app.schemas.bindings import BindingRead
from app.schemas.suggestions import SuggestionRead
from app.schemas.workspaces import WorkspaceCreate, WorkspaceDetail, WorkspaceSummary, WorkspaceUpdate
from app.services.access import get_workspace, visible_to
from app.services.suggestions import list_suggestions

logger = logging.getLogger(__name__)


async def list_workspaces(db: AsyncSession, identity: User | None) -> list[WorkspaceSummary]:
    binding_count = (
        select(func.count(SourceBinding.id))
        .where(SourceBinding.workspace_id == Workspace.id)
        .correlate(Workspace)
        .scalar_subquery()
    )
    artifact_count = (
        select(func.count(Artifact.id))
        .where(Artifact.workspace_id == Workspace.id)
        .correlate(Workspace)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Workspace, binding_count, artifact_count)
        .where(visible_to(identity))
        .order_by(Workspace.updated_at.desc())
    )
    summaries = []
    for workspace, bindings, artifacts in result.all():
        summary = WorkspaceSummary.model_validate(workspace)
        summary.binding_count = bindings
        summary.artifact_count = artifacts
        summaries.append(summary)
    return summaries


async def get_workspace_detail(
    db: AsyncSession,
    workspace_id: UUID,
    identity: User | None,
) -> WorkspaceDetail:
    """Workspace together with its bindings, artifacts and current suggestions."""
    workspace = await get_workspace(db, workspace_id, identity)
    bindings = await db.execute(
        select(SourceBinding)
        .where(SourceBinding.workspace_id == workspace.id)
        .order_by(SourceBinding.created_at, SourceBinding.id)
    )
    artifacts = await db.execute(
        select(Artifact)
        .where(Artifact.workspace_id == workspace.id)
        .order_by(Artifact.created_at, Artifact.id)
    )
    suggestions = await list_suggestions(db, workspace.id)
    return WorkspaceDetail(
        id=workspace.id,
        owner_user_id=workspace.owner_user_id,
        name=workspace.name,
        description=workspace.description,
        created_at=workspace.created_at,
        updated_at=workspace.updated_at,
        bindings=[BindingRead.model_validate(b) for b in bindings.scalars()],
        artifacts=[ArtifactRead.model_validate(a) for a in artifacts.scalars()],
        suggestions=[SuggestionRead.model_validate(s) for s in suggestions],
    )


async def create_workspace(db: AsyncSession, data: WorkspaceCreate, identity: User | None) -> Workspace:
    """Signed-in callers own what they create; anonymous workspaces are public."""
    workspace = Workspace(
        owner_user_id=identity.id if identity else None,
        name=data.name,
        description=data.description,
    )
    db.add(workspace)
    await db.commit()
    await db.refresh(workspace)
    logger.info("Created workspace %s (owner=%s)", workspace.id, workspace.owner_user_id)
    return workspace


async def update_workspace(
    db: AsyncSession,
    workspace_id: UUID,
    data: WorkspaceUpdate,
    identity: User | None,
) -> Workspace:
    workspace = await get_workspace(db, workspace_id, identity)
    workspace.name = data.name
    workspace.description = data.description
    await db.commit()
    await db.refresh(workspace)
    return workspace


async def delete_workspace(db: AsyncSession, workspace_id: UUID, identity: User | None) -> None:
    """Delete a workspace and, through cascades, every entity under it."""
    workspace = await get_workspace(db, workspace_id, identity)
    await db.delete(workspace)
    await db.commit()
    logger.info("Deleted workspace %s", workspace_id)
