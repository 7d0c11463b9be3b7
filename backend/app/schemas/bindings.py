"""
Source binding schemas.

Binding config is a closed union keyed by binding type. Each type has its own
config model; unknown keys are kept (connectors may stash extra state) but
declared keys must have the right shape.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.db.models import BindingStatus, BindingType
from app.schemas.base import BaseSchema, IDMixin, JsonObject, TimestampMixin


class _SourceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")


class OAuthTokens(_SourceConfig):
    """Google-style OAuth credentials shared by drive, doc store and mailbox."""

    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expiry_date: int | None = None


class DocStoreConfig(OAuthTokens):
    folder_id: str | None = None
    folder_name: str | None = None


class DriveConfig(OAuthTokens):
    folder_id: str | None = None
    folder_name: str | None = None


class MailboxConfig(OAuthTokens):
    pass


class IssueTrackerConfig(_SourceConfig):
    base_url: str | None = None
    email: str | None = None
    api_token: str | None = None
    project_key: str | None = None
    board_id: str | int | None = None
    board_name: str | None = None
    board_type: str | None = None


class RelationalDbConfig(_SourceConfig):
    host: str | None = None
    port: int | None = None
    database: str | None = None
    username: str | None = None
    password: str | None = None


class WikiConfig(_SourceConfig):
    base_url: str | None = None
    email: str | None = None
    api_token: str | None = None
    space_key: str | None = None
    space_name: str | None = None


CONFIG_MODELS: dict[BindingType, type[_SourceConfig]] = {
    BindingType.DOC_STORE: DocStoreConfig,
    BindingType.DRIVE: DriveConfig,
    BindingType.MAILBOX: MailboxConfig,
    BindingType.ISSUE_TRACKER: IssueTrackerConfig,
    BindingType.RELATIONAL_DB: RelationalDbConfig,
    BindingType.WIKI: WikiConfig,
}


class BindingCreate(BaseSchema):
    """Schema for attaching a source to a workspace."""

    type: BindingType
    name: str = Field(..., min_length=1, max_length=255)
    config: JsonObject = Field(default_factory=dict)


class BindingUpdate(BaseSchema):
    """Schema for updating a binding. All fields optional; config is replaced."""

    name: str | None = Field(None, min_length=1, max_length=255)
    config: JsonObject | None = None
    status: BindingStatus | None = None


class BindingRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading binding data."""

    workspace_id: UUID
    type: BindingType
    name: str
    config: JsonObject
    status: BindingStatus
