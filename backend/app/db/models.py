"""
SQLAlchemy 2.0 Models for Cowork.

Uses modern declarative syntax with Mapped[] type annotations.
All models use UUID primary keys and proper relationship definitions.

Every child entity (binding, artifact, suggestion, widget, task) hangs off
exactly one workspace. Deleting a workspace cascades both in the ORM and at
the database level (ON DELETE CASCADE), so no orphan rows survive.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


# =============================================================================
# ENUMS
# =============================================================================


class BindingType(str, PyEnum):
    """Kind of external data source a binding points at."""

    DOC_STORE = "doc_store"
    DRIVE = "drive"
    MAILBOX = "mailbox"
    ISSUE_TRACKER = "issue_tracker"
    RELATIONAL_DB = "relational_db"
    WIKI = "wiki"


class BindingStatus(str, PyEnum):
    """Connection health of a source binding."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class WidgetKind(str, PyEnum):
    """Dashboard widget kind."""

    SUMMARY = "summary"
    KEY_POINTS = "key_points"
    CHART = "chart"
    CUSTOM = "custom"
    ACTION_ITEMS = "action_items"


def _in_list(column: str, enum_cls: type[PyEnum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


# =============================================================================
# MODELS
# =============================================================================


class User(Base):
    """
    Signed-in account.

    Created on first successful Google sign-in; name and avatar are refreshed
    on every later sign-in.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    google_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    last_login_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    sessions: Mapped[list["Session"]] = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    workspaces: Mapped[list["Workspace"]] = relationship(
        "Workspace", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )


class Session(Base):
    """
    Opaque bearer session.

    The primary key doubles as the bearer token. A session belongs to exactly
    one user and is invalid once expires_at has passed.
    """

    __tablename__ = "sessions"
    __table_args__ = (Index("idx_sessions_user_id", "user_id"),)

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="sessions")


class Workspace(Base):
    """
    Named grouping of sources, artifacts, suggestions, widgets and tasks.

    owner_user_id NULL means the workspace is public (legacy mode): anyone may
    read and edit it. A non-null owner restricts all access to that user.
    updated_at is bumped whenever a child changes so listings sort by recency.
    """

    __tablename__ = "workspaces"
    __table_args__ = (
        Index("idx_workspaces_owner_updated_at", "owner_user_id", "updated_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    owner_user_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    owner: Mapped[Optional["User"]] = relationship("User", back_populates="workspaces")
    bindings: Mapped[list["SourceBinding"]] = relationship(
        "SourceBinding", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True
    )
    artifacts: Mapped[list["Artifact"]] = relationship(
        "Artifact", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True
    )
    suggestions: Mapped[list["Suggestion"]] = relationship(
        "Suggestion", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True
    )
    widgets: Mapped[list["Widget"]] = relationship(
        "Widget", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True
    )


class SourceBinding(Base):
    """
    Configured link to one external data source.

    config is stored as JSON; its shape depends on type and is validated at
    the API boundary (see app.schemas.bindings).
    """

    __tablename__ = "source_bindings"
    __table_args__ = (
        Index("idx_source_bindings_workspace_id", "workspace_id"),
        CheckConstraint(_in_list("type", BindingType), name="valid_binding_type"),
        CheckConstraint(_in_list("status", BindingStatus), name="valid_binding_status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    workspace_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    config: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=BindingStatus.CONNECTED.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="bindings")
    artifacts: Mapped[list["Artifact"]] = relationship(
        "Artifact", back_populates="binding", cascade="all, delete-orphan", passive_deletes=True
    )


class Artifact(Base):
    """
    Imported unit of content (document, spreadsheet, page) from a binding.

    workspace_id duplicates binding.workspace_id so workspace-level cascades
    and queries need no join. content caches the text body used for
    summarization, extraction and chat context.
    """

    __tablename__ = "artifacts"
    __table_args__ = (
        Index("idx_artifacts_workspace_id", "workspace_id"),
        Index("idx_artifacts_source_binding_id", "source_binding_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    source_binding_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("source_bindings.id", ondelete="CASCADE"), nullable=False
    )
    workspace_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    kind: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    external_id: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    metadata_json: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="artifacts")
    binding: Mapped["SourceBinding"] = relationship("SourceBinding", back_populates="artifacts")


class Suggestion(Base):
    """
    Derived, regenerable recommended action.

    Regeneration deletes every suggestion of the workspace and inserts a fresh
    batch; position preserves the generator's emission order.
    """

    __tablename__ = "suggestions"
    __table_args__ = (Index("idx_suggestions_workspace_position", "workspace_id", "position"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    workspace_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False
    )
    source_binding_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("source_bindings.id", ondelete="CASCADE"), nullable=True
    )
    artifact_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("artifacts.id", ondelete="CASCADE"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    action_kind: Mapped[str] = mapped_column(String(64), nullable=False)
    action_config: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="suggestions")


class Widget(Base):
    """
    Persisted dashboard tile.

    Displayed by position ascending, ties broken most-recent-first. content is
    overwritten by refresh; config is shallow-merged on patch.
    """

    __tablename__ = "widgets"
    __table_args__ = (
        Index("idx_widgets_workspace_position", "workspace_id", "position"),
        CheckConstraint(_in_list("kind", WidgetKind), name="valid_widget_kind"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    workspace_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False
    )
    artifact_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("artifacts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    config: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="widgets")


class Task(Base):
    """Simple to-do item, created manually or promoted from an action item."""

    __tablename__ = "tasks"
    __table_args__ = (Index("idx_tasks_workspace_created_at", "workspace_id", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    workspace_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(default=False, nullable=False)
    source: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)  # e.g. widget title
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="tasks")
