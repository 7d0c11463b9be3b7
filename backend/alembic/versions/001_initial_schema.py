"""Initial schema.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Creates the Cowork schema:
- Extensions: uuid-ossp
- Tables: users, sessions, workspaces, source_bindings, artifacts, suggestions, widgets, tasks
- Every workspace child cascades on workspace delete; widgets only lose their artifact link
- Triggers: updated_at auto-update function and triggers
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UPDATED_AT_TABLES = ["users", "workspaces", "source_bindings", "artifacts", "widgets", "tasks"]


def _id() -> sa.Column:
    return sa.Column(
        "id", postgresql.UUID(as_uuid=True), server_default=sa.text("uuid_generate_v4()"), nullable=False
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, postgresql.TIMESTAMP(timezone=True), server_default=sa.text("NOW()"), nullable=False)


def _workspace_fk() -> list:
    return [
        sa.Column("workspace_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ==========================================================================
    # USERS / SESSIONS
    # ==========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _timestamp("last_login_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("google_id"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_sessions_user_id", "sessions", ["user_id"])

    # ==========================================================================
    # WORKSPACES
    # ==========================================================================
    op.create_table(
        "workspaces",
        _id(),
        # NULL owner = public workspace
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_workspaces_owner_updated_at", "workspaces", ["owner_user_id", "updated_at"])

    # ==========================================================================
    # SOURCE BINDINGS / ARTIFACTS
    # ==========================================================================
    op.create_table(
        "source_bindings",
        _id(),
        *_workspace_fk(),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("config", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("status", sa.String(32), server_default="connected", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "type IN ('doc_store', 'drive', 'mailbox', 'issue_tracker', 'relational_db', 'wiki')",
            name="valid_binding_type",
        ),
        sa.CheckConstraint(
            "status IN ('connected', 'disconnected', 'error')",
            name="valid_binding_status",
        ),
    )
    op.create_index("idx_source_bindings_workspace_id", "source_bindings", ["workspace_id"])

    op.create_table(
        "artifacts",
        _id(),
        sa.Column("source_binding_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_workspace_fk(),
        sa.Column("name", sa.String(512), nullable=False),
        sa.Column("kind", sa.String(64), server_default="", nullable=False),
        sa.Column("external_id", sa.String(512), server_default="", nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("metadata_json", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["source_binding_id"], ["source_bindings.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_artifacts_workspace_id", "artifacts", ["workspace_id"])
    op.create_index("idx_artifacts_source_binding_id", "artifacts", ["source_binding_id"])

    # ==========================================================================
    # SUGGESTIONS / WIDGETS / TASKS
    # ==========================================================================
    op.create_table(
        "suggestions",
        _id(),
        *_workspace_fk(),
        sa.Column("source_binding_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("artifact_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("action_kind", sa.String(64), nullable=False),
        sa.Column("action_config", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("position", sa.Integer(), server_default="0", nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["source_binding_id"], ["source_bindings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["artifact_id"], ["artifacts.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_suggestions_workspace_position", "suggestions", ["workspace_id", "position"])

    op.create_table(
        "widgets",
        _id(),
        *_workspace_fk(),
        sa.Column("artifact_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("kind", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("config", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("position", sa.Integer(), server_default="0", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["artifact_id"], ["artifacts.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "kind IN ('summary', 'key_points', 'chart', 'custom', 'action_items')",
            name="valid_widget_kind",
        ),
    )
    op.create_index("idx_widgets_workspace_position", "widgets", ["workspace_id", "position"])
    op.create_index("ix_widgets_artifact_id", "widgets", ["artifact_id"])

    op.create_table(
        "tasks",
        _id(),
        *_workspace_fk(),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("source", sa.String(255), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_workspace_created_at", "tasks", ["workspace_id", "created_at"])

    # ==========================================================================
    # UPDATED_AT TRIGGER FUNCTION
    # ==========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ language 'plpgsql'
    """)

    for table in UPDATED_AT_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    for table in UPDATED_AT_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")

    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Reverse dependency order
    op.drop_table("tasks")
    op.drop_table("widgets")
    op.drop_table("suggestions")
    op.drop_table("artifacts")
    op.drop_table("source_bindings")
    op.drop_table("workspaces")
    op.drop_table("sessions")
    op.drop_table("users")
