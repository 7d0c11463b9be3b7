"""Artifact schemas."""

from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema, IDMixin, JsonObject, TimestampMixin


class ArtifactCreate(BaseSchema):
    """Schema for importing an artifact under a binding."""

    name: str = Field(..., min_length=1, max_length=512)
    kind: str = Field(default="", max_length=64)
    external_id: str = Field(default="", max_length=512)
    content: str | None = None
    metadata_json: JsonObject = Field(default_factory=dict, validation_alias="metadata")


class ArtifactRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading artifact data."""

    source_binding_id: UUID
    workspace_id: UUID
    name: str
    kind: str
    external_id: str
    content: str | None
    metadata_json: JsonObject = Field(serialization_alias="metadata")


class ArtifactSummaryResponse(BaseSchema):
    """On-demand summary of an artifact (not persisted)."""

    artifact_id: UUID
    name: str
    summary: str


class ArtifactKeyPointsResponse(BaseSchema):
    """On-demand key points of an artifact (not persisted)."""

    artifact_id: UUID
    name: str
    points: str
