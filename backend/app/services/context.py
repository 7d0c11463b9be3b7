"""Flat prompt context for workspace chat."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.models import Artifact, BindingType, SourceBinding, User, Workspace
from app.services.access import get_workspace
from app.services.chat_service import ChatService

settings = get_settings()

TRUNCATION_MARKER = "[Content truncated...]"

# binding type -> (line label, config key)
_NOTABLE_FIELDS = {
    BindingType.ISSUE_TRACKER.value: ("Board", "board_name"),
    BindingType.RELATIONAL_DB.value: ("Database", "database"),
    BindingType.WIKI.value: ("Space", "space_name"),
    BindingType.DRIVE.value: ("Folder", "folder_name"),
    BindingType.DOC_STORE.value: ("Folder", "folder_name"),
}


def build_context(
    workspace: Workspace,
    bindings: Sequence[SourceBinding],
    artifacts: Sequence[Artifact],
    max_chars: int | None = None,
) -> str:
    """
    Build the text block handed to the chat collaborator.

    Each artifact contributes at most max_chars characters of content
    (artifact_context_max_chars by default), followed by a truncation marker
    when cut.
    """
    max_chars = max_chars if max_chars is not None else settings.artifact_context_max_chars

    lines = [f'Workspace: "{workspace.name}"']
    if workspace.description:
        lines.append(f"Description: {workspace.description}")
    lines.append("")

    if bindings:
        lines.append("=== Connected Data Sources ===")
        for binding in bindings:
            lines.append("")
            lines.append(f"[{binding.type.upper()}] {binding.name}")
            notable = _NOTABLE_FIELDS.get(binding.type)
            if notable:
                label, key = notable
                value = (binding.config or {}).get(key)
                if value:
                    lines.append(f"  - {label}: {value}")
        lines.append("")

    if artifacts:
        lines.append("=== Imported Documents ===")
        for artifact in artifacts:
            lines.append("")
            lines.append(f"--- {artifact.name} ({artifact.kind}) ---")
            if artifact.content:
                lines.append(artifact.content[:max_chars])
                if len(artifact.content) > max_chars:
                    lines.append(TRUNCATION_MARKER)
        lines.append("")

    return "\n".join(lines)


async def load_context(db: AsyncSession, workspace: Workspace) -> str:
    """Read a workspace's bindings and artifacts and build its chat context."""
    bindings = await db.execute(
        select(SourceBinding)
        .where(SourceBinding.workspace_id == workspace.id)
        .order_by(SourceBinding.created_at, SourceBinding.id)
    )
    artifacts = await db.execute(
        select(Artifact)
        .where(Artifact.workspace_id == workspace.id)
        .order_by(Artifact.created_at, Artifact.id)
    )
    return build_context(workspace, list(bindings.scalars()), list(artifacts.scalars()))


async def chat(
    db: AsyncSession,
    workspace_id: UUID,
    identity: User | None,
    message: str,
    history: list[dict],
    generator: ChatService,
) -> str:
    """Answer a chat message grounded in the workspace's context."""
    workspace = await get_workspace(db, workspace_id, identity)
    context = await load_context(db, workspace)
    return await generator.chat(message, context, history)
