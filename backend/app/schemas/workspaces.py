"""Workspace schemas."""

from uuid import UUID

from pydantic import Field

from app.schemas.artifacts import ArtifactRead
from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.schemas.bindings import BindingRead
from app.schemas.suggestions import SuggestionRead


class WorkspaceCreate(BaseSchema):
    """Schema for creating a workspace. Signed-in callers become the owner."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class WorkspaceUpdate(BaseSchema):
    """Schema for renaming a workspace or editing its description."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class WorkspaceRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading workspace data."""

    owner_user_id: UUID | None
    name: str
    description: str


class WorkspaceSummary(WorkspaceRead):
    """Workspace listing entry with child counts."""

    binding_count: int = 0
    artifact_count: int = 0


class WorkspaceDetail(WorkspaceRead):
    """Workspace with its bindings, artifacts and current suggestions."""

    bindings: list[BindingRead]
    artifacts: list[ArtifactRead]
    suggestions: list[SuggestionRead]
