"""Imported artifacts and on-demand summarization."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.models import Artifact, SourceBinding, User
from app.schemas.artifacts import ArtifactCreate
from app.services.access import get_child, touch_workspace
from app.services.chat_service import ChatService
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)
settings = get_settings()


def cap_content(content: str | None, max_chars: int | None = None) -> str | None:
    """Apply the optional ingestion cap (artifact_content_max_chars)."""
    max_chars = max_chars if max_chars is not None else settings.artifact_content_max_chars
    if content is None or max_chars is None:
        return content
    return content[:max_chars]


async def list_artifacts(db: AsyncSession, binding_id: UUID, identity: User | None) -> list[Artifact]:
    binding, _ = await get_child(db, SourceBinding, binding_id, identity)
    result = await db.execute(
        select(Artifact)
        .where(Artifact.source_binding_id == binding.id)
        .order_by(Artifact.created_at, Artifact.id)
    )
    return list(result.scalars())


async def create_artifact(
    db: AsyncSession,
    binding_id: UUID,
    data: ArtifactCreate,
    identity: User | None,
) -> Artifact:
    """Import an artifact under a binding; the workspace comes from the binding."""
    binding, workspace = await get_child(db, SourceBinding, binding_id, identity)
    artifact = Artifact(
        source_binding_id=binding.id,
        workspace_id=workspace.id,
        name=data.name,
        kind=data.kind,
        external_id=data.external_id,
        content=cap_content(data.content),
        metadata_json=data.metadata_json,
    )
    db.add(artifact)
    await touch_workspace(db, workspace.id)
    await db.commit()
    await db.refresh(artifact)
    logger.info("Imported artifact %s (%s) into workspace %s", artifact.id, artifact.kind, workspace.id)
    return artifact


async def get_artifact(db: AsyncSession, artifact_id: UUID, identity: User | None) -> Artifact:
    artifact, _ = await get_child(db, Artifact, artifact_id, identity)
    return artifact


async def delete_artifact(db: AsyncSession, artifact_id: UUID, identity: User | None) -> None:
    """Remove an artifact. Widgets that pointed at it keep their content but lose the link."""
    artifact, workspace = await get_child(db, Artifact, artifact_id, identity)
    await db.delete(artifact)
    await touch_workspace(db, workspace.id)
    await db.commit()


async def summarize_artifact(
    db: AsyncSession,
    artifact_id: UUID,
    identity: User | None,
    generator: ChatService,
) -> tuple[Artifact, str]:
    artifact = await get_artifact(db, artifact_id, identity)
    if not artifact.content:
        raise ValidationError("Artifact has no content to summarize")
    return artifact, await generator.summarize(artifact.content, artifact.kind)


async def extract_artifact_points(
    db: AsyncSession,
    artifact_id: UUID,
    identity: User | None,
    generator: ChatService,
) -> tuple[Artifact, str]:
    artifact = await get_artifact(db, artifact_id, identity)
    if not artifact.content:
        raise ValidationError("Artifact has no content to analyze")
    return artifact, await generator.extract_key_points(artifact.content)
