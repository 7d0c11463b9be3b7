"""Task (to-do) schemas."""

from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin


class TaskCreate(BaseSchema):
    """Schema for creating a task. Text is checked in the service layer."""

    text: str = ""
    source: str | None = Field(None, max_length=255)


class TaskUpdate(BaseSchema):
    """Omitting completed toggles the current value."""

    completed: bool | None = None
    text: str | None = Field(None, min_length=1)


class TaskRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading task data."""

    workspace_id: UUID
    text: str
    completed: bool
    source: str | None
