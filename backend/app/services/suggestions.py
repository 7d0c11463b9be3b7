"""
Rule-based suggestion generator.

generate_suggestions() is a pure function of the workspace's bindings and
artifacts: each binding type and each artifact kind maps to a fixed, ordered
template list. regenerate() replaces the stored batch in one transaction, so
running it twice on unchanged inputs yields the same titles, descriptions and
action configs in the same order (only ids and timestamps differ).
"""

import logging
from collections.abc import Sequence
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Artifact, BindingType, SourceBinding, Suggestion, User
from app.services.access import get_child, get_workspace, touch_workspace

logger = logging.getLogger(__name__)


class SuggestionDraft(BaseModel):
    """A suggestion before it is persisted."""

    title: str
    description: str
    action_kind: str
    action_config: dict[str, Any] = Field(default_factory=dict)
    source_binding_id: UUID | None = None
    artifact_id: UUID | None = None


# (title, description, action_kind, fixed action_config) per binding type.
# "{label}" is replaced with the binding's display field (see _LABEL_FIELDS).
_BINDING_TEMPLATES: dict[str, list[tuple[str, str, str, dict[str, Any]]]] = {
    BindingType.ISSUE_TRACKER.value: [
        ("View Kanban Board", "View the Kanban board for {label}", "view_kanban", {}),
        ("Show Project Plan", "View the project timeline and sprint planning", "view_project_plan", {}),
        ("View Active Sprint", "See current sprint tickets and progress", "view_sprint", {}),
        ("Track Sprint Progress", "Monitor burndown and team velocity", "view_sprint", {}),
        ("View Epics & Roadmap", "See high-level project epics and their status", "view_project_plan", {}),
        ("Recent Activity", "View recently updated tickets", "view_project_plan", {}),
    ],
    BindingType.MAILBOX.value: [
        ("View Inbox", "Browse your recent emails", "view_inbox", {}),
        ("Search Emails", "Search across all your messages", "search_emails", {}),
        ("Unread Messages", "View emails you haven't read yet", "view_unread", {"query": "is:unread"}),
        ("Starred Messages", "View your important starred emails", "view_starred", {"query": "is:starred"}),
        ("Recent Threads", "View your most recent conversations", "view_recent", {}),
        (
            "Emails with Attachments",
            "Find emails that have file attachments",
            "view_attachments",
            {"query": "has:attachment"},
        ),
        (
            "View Emails by Label",
            "Browse emails from a specific label and add to dashboard",
            "view_by_label",
            {},
        ),
    ],
    BindingType.RELATIONAL_DB.value: [
        ("Create Dashboard View", "Build a visual dashboard from your database tables", "create_dashboard", {}),
        ("Generate Data Report", "Create a searchable report from your data", "generate_report", {}),
        ("Query with Natural Language", "Search your database using plain text queries", "natural_query", {}),
        ("View Table Schema", "Explore your database structure", "view_schema", {}),
        ("Export Data", "Export query results to CSV or JSON", "export_data", {}),
    ],
    BindingType.DRIVE.value: [
        ("Browse Folder Contents", "View all files in {label}", "browse_folder", {}),
        ("Search Files", "Search across all files in this folder", "search_files", {}),
        ("Recent Files", "View recently modified documents", "recent_files", {}),
        ("Import Documents", "Add Drive documents to this workspace", "import_files", {}),
        ("View Spreadsheets", "Browse spreadsheets in this folder", "view_sheets", {}),
        ("View Presentations", "Browse presentations in this folder", "view_slides", {}),
    ],
    BindingType.WIKI.value: [
        ("Browse Wiki Pages", "View pages in {label}", "browse_wiki", {}),
        ("Search Documentation", "Search across all wiki pages", "search_wiki", {}),
        ("View Recent Updates", "See recently modified pages", "recent_updates", {}),
        ("View Page Tree", "Navigate the page hierarchy", "view_tree", {}),
        ("Find Attachments", "Search for files attached to pages", "find_attachments", {}),
        ("View Labels", "Browse pages by label/tag", "view_labels", {}),
    ],
    # Document stores only get artifact-specific suggestions
    BindingType.DOC_STORE.value: [],
}

# binding type -> (config field shown in descriptions, fallback phrase, config key copied
# into action_config)
_LABEL_FIELDS: dict[str, tuple[str, str, str]] = {
    BindingType.ISSUE_TRACKER.value: ("board_name", "this project", "board_id"),
    BindingType.DRIVE.value: ("folder_name", "the connected folder", "folder_id"),
    BindingType.WIKI.value: ("space_name", "the connected space", "space_key"),
}

_ARTIFACT_TEMPLATES: dict[str, list[tuple[str, str, str]]] = {
    "document": [
        ("Summarize Document", 'Get a summary of "{name}"', "summarize"),
        ("Extract Key Points", 'Extract action items and key points from "{name}"', "extract_points"),
    ],
    "spreadsheet": [
        ("Visualize Data", 'Create charts from "{name}"', "visualize"),
        ("Generate Insights", 'Analyze trends in "{name}"', "analyze_data"),
    ],
}
_ARTIFACT_TEMPLATES["doc_store_document"] = _ARTIFACT_TEMPLATES["document"]


def _binding_suggestions(binding: SourceBinding) -> list[SuggestionDraft]:
    config = binding.config or {}
    label = ""
    base_config: dict[str, Any] = {}
    if binding.type in _LABEL_FIELDS:
        label_field, fallback, key_field = _LABEL_FIELDS[binding.type]
        label = config.get(label_field) or fallback
        base_config = {key_field: config.get(key_field)}

    return [
        SuggestionDraft(
            title=title,
            description=description.format(label=label),
            action_kind=action_kind,
            action_config={**base_config, **extra},
            source_binding_id=binding.id,
        )
        for title, description, action_kind, extra in _BINDING_TEMPLATES.get(binding.type, [])
    ]


def _artifact_suggestions(artifact: Artifact) -> list[SuggestionDraft]:
    return [
        SuggestionDraft(
            title=title,
            description=description.format(name=artifact.name),
            action_kind=action_kind,
            action_config={"artifact_id": str(artifact.id)},
            source_binding_id=artifact.source_binding_id,
            artifact_id=artifact.id,
        )
        for title, description, action_kind in _ARTIFACT_TEMPLATES.get(artifact.kind, [])
    ]


def generate_suggestions(
    bindings: Sequence[SourceBinding],
    artifacts: Sequence[Artifact],
) -> list[SuggestionDraft]:
    """
    Compute the suggestion batch for a workspace.

    All binding-derived drafts come first, grouped by binding in input order,
    followed by artifact-derived drafts grouped by artifact in input order.
    Unknown binding types and artifact kinds contribute nothing.
    """
    drafts: list[SuggestionDraft] = []
    for binding in bindings:
        drafts.extend(_binding_suggestions(binding))
    for artifact in artifacts:
        drafts.extend(_artifact_suggestions(artifact))
    return drafts


async def list_suggestions(db: AsyncSession, workspace_id: UUID) -> list[Suggestion]:
    result = await db.execute(
        select(Suggestion)
        .where(Suggestion.workspace_id == workspace_id)
        .order_by(Suggestion.position, Suggestion.created_at)
    )
    return list(result.scalars())


async def regenerate(db: AsyncSession, workspace_id: UUID, identity: User | None) -> list[Suggestion]:
    """
    Replace every suggestion of a workspace with a freshly generated batch.

    The delete and the inserts are committed together; a failure in between
    rolls back to the previous batch.
    """
    workspace = await get_workspace(db, workspace_id, identity)

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
    drafts = generate_suggestions(list(bindings.scalars()), list(artifacts.scalars()))

    await db.execute(delete(Suggestion).where(Suggestion.workspace_id == workspace.id))
    for position, draft in enumerate(drafts):
        db.add(
            Suggestion(
                workspace_id=workspace.id,
                source_binding_id=draft.source_binding_id,
                artifact_id=draft.artifact_id,
                title=draft.title,
                description=draft.description,
                action_kind=draft.action_kind,
                action_config=draft.action_config,
                position=position,
            )
        )
    await touch_workspace(db, workspace.id)
    await db.commit()

    logger.info("Regenerated %d suggestions for workspace %s", len(drafts), workspace.id)
    return await list_suggestions(db, workspace.id)


async def delete_suggestion(db: AsyncSession, suggestion_id: UUID, identity: User | None) -> None:
    suggestion, workspace = await get_child(db, Suggestion, suggestion_id, identity)
    await db.delete(suggestion)
    await touch_workspace(db, workspace.id)
    await db.commit()
