"""Pydantic schemas for API request/response validation."""

from app.schemas.user import UserRead
from app.schemas.auth import GoogleAuthRequest, MeResponse, SessionResponse
from app.schemas.workspaces import (
    WorkspaceCreate,
    WorkspaceDetail,
    WorkspaceRead,
    WorkspaceSummary,
    WorkspaceUpdate,
)
from app.schemas.bindings import BindingCreate, BindingRead, BindingUpdate
from app.schemas.artifacts import (
    ArtifactCreate,
    ArtifactKeyPointsResponse,
    ArtifactRead,
    ArtifactSummaryResponse,
)
from app.schemas.suggestions import SuggestionRead
from app.schemas.widgets import (
    ActionItemsWidgetRequest,
    MailMessage,
    ReorderResponse,
    WidgetCreate,
    WidgetRead,
    WidgetReorderRequest,
    WidgetUpdate,
)
from app.schemas.tasks import TaskCreate, TaskRead, TaskUpdate
from app.schemas.chat import ChatRequest, ChatResponse

__all__ = [
    # User
    "UserRead",
    # Auth
    "GoogleAuthRequest",
    "MeResponse",
    "SessionResponse",
    # Workspaces
    "WorkspaceCreate",
    "WorkspaceDetail",
    "WorkspaceRead",
    "WorkspaceSummary",
    "WorkspaceUpdate",
    # Bindings
    "BindingCreate",
    "BindingRead",
    "BindingUpdate",
    # Artifacts
    "ArtifactCreate",
    "ArtifactKeyPointsResponse",
    "ArtifactRead",
    "ArtifactSummaryResponse",
    # Suggestions
    "SuggestionRead",
    # Widgets
    "ActionItemsWidgetRequest",
    "MailMessage",
    "ReorderResponse",
    "WidgetCreate",
    "WidgetRead",
    "WidgetReorderRequest",
    "WidgetUpdate",
    # Tasks
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    # Chat
    "ChatRequest",
    "ChatResponse",
]
