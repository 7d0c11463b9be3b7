"""
Widget schemas.

Also carries the mail message payload used to build action-item widgets:
connectors fetch messages and hand them over as-is, the backend only scans
them.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.db.models import WidgetKind
from app.schemas.base import BaseSchema, IDMixin, JsonObject, TimestampMixin


class WidgetCreate(BaseSchema):
    """Schema for adding a widget to a workspace dashboard."""

    kind: WidgetKind
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    config: JsonObject = Field(default_factory=dict)
    artifact_id: UUID | None = None


class WidgetUpdate(BaseSchema):
    """Partial update. config is shallow-merged into the stored config."""

    config: JsonObject | None = None
    content: str | None = None
    title: str | None = Field(None, min_length=1, max_length=255)


class WidgetRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading widget data."""

    workspace_id: UUID
    artifact_id: UUID | None
    kind: WidgetKind
    title: str
    content: str
    config: JsonObject
    position: int


class WidgetPosition(BaseModel):
    id: UUID
    position: int


class WidgetReorderRequest(BaseModel):
    positions: list[WidgetPosition]


class ReorderResponse(BaseModel):
    success: bool = True
    updated: int


# =============================================================================
# ACTION ITEMS
# =============================================================================


class MailMessage(BaseModel):
    """A fetched mail message. Either body may be missing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    sender: str = Field("", alias="from")
    subject: str = ""
    date: str = ""
    text_body: str | None = None
    html_body: str | None = None


class ActionItemsWidgetRequest(BaseModel):
    """Build an action_items widget from messages fetched by a mailbox connector."""

    messages: list[MailMessage] = Field(default_factory=list)
    label_name: str | None = None
    source_binding_id: UUID | None = None
    title: str | None = Field(None, max_length=255)
