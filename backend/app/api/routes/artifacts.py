"""Artifact routes: import, browse and on-demand analysis."""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import DbSession, Identity, TextGenerator
from app.schemas.artifacts import (
    ArtifactCreate,
    ArtifactKeyPointsResponse,
    ArtifactRead,
    ArtifactSummaryResponse,
)
from app.schemas.base import SuccessResponse
from app.services import artifacts as artifact_service

router = APIRouter(tags=["artifacts"])


@router.get("/bindings/{binding_id}/artifacts", response_model=list[ArtifactRead])
async def list_artifacts(binding_id: UUID, identity: Identity, db: DbSession) -> list[ArtifactRead]:
    artifacts = await artifact_service.list_artifacts(db, binding_id, identity)
    return [ArtifactRead.model_validate(a) for a in artifacts]


@router.post(
    "/bindings/{binding_id}/artifacts",
    response_model=ArtifactRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_artifact(
    binding_id: UUID,
    data: ArtifactCreate,
    identity: Identity,
    db: DbSession,
) -> ArtifactRead:
    """Import content fetched by a connector. Suggestions are not regenerated automatically."""
    artifact = await artifact_service.create_artifact(db, binding_id, data, identity)
    return ArtifactRead.model_validate(artifact)


@router.get("/artifacts/{artifact_id}", response_model=ArtifactRead)
async def get_artifact(artifact_id: UUID, identity: Identity, db: DbSession) -> ArtifactRead:
    artifact = await artifact_service.get_artifact(db, artifact_id, identity)
    return ArtifactRead.model_validate(artifact)


@router.delete("/artifacts/{artifact_id}", response_model=SuccessResponse)
async def delete_artifact(artifact_id: UUID, identity: Identity, db: DbSession) -> SuccessResponse:
    await artifact_service.delete_artifact(db, artifact_id, identity)
    return SuccessResponse()


@router.post("/artifacts/{artifact_id}/summarize", response_model=ArtifactSummaryResponse)
async def summarize_artifact(
    artifact_id: UUID,
    identity: Identity,
    db: DbSession,
    generator: TextGenerator,
) -> ArtifactSummaryResponse:
    """Summarize an artifact's cached content. The summary is not stored."""
    artifact, summary = await artifact_service.summarize_artifact(db, artifact_id, identity, generator)
    return ArtifactSummaryResponse(artifact_id=artifact.id, name=artifact.name, summary=summary)


@router.post("/artifacts/{artifact_id}/extract-points", response_model=ArtifactKeyPointsResponse)
async def extract_points(
    artifact_id: UUID,
    identity: Identity,
    db: DbSession,
    generator: TextGenerator,
) -> ArtifactKeyPointsResponse:
    """Extract key points and action items from an artifact. Not stored."""
    artifact, points = await artifact_service.extract_artifact_points(
        db, artifact_id, identity, generator
    )
    return ArtifactKeyPointsResponse(artifact_id=artifact.id, name=artifact.name, points=points)
