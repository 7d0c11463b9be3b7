"""Suggestion schemas."""

from uuid import UUID

from app.schemas.base import BaseSchema, CreatedAtMixin, IDMixin, JsonObject


class SuggestionRead(BaseSchema, IDMixin, CreatedAtMixin):
    """Schema for reading a suggestion."""

    workspace_id: UUID
    source_binding_id: UUID | None
    artifact_id: UUID | None
    title: str
    description: str
    action_kind: str
    action_config: JsonObject
    position: int
