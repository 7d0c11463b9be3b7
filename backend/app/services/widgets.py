"""
Widget lifecycle: create, list, reorder, refresh, patch, delete.

Positions are plain integers compared ascending (ties go to the newest
widget) and need not be contiguous. Reorder rewrites only the widgets it
names. Refresh reads the linked artifact, calls the collaborator without
holding anything open, then overwrites content; if the collaborator fails,
nothing is written.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Artifact, SourceBinding, User, Widget, WidgetKind, Workspace
from app.schemas.widgets import (
    ActionItemsWidgetRequest,
    MailMessage,
    WidgetCreate,
    WidgetPosition,
    WidgetUpdate,
)
from app.services import action_items
from app.services.access import authorize_workspace, get_child, get_workspace, touch_workspace
from app.services.chat_service import ChatService
from app.services.errors import NotFound, NotRefreshable, ValidationError

logger = logging.getLogger(__name__)


async def _next_position(db: AsyncSession, workspace_id: UUID) -> int:
    result = await db.execute(
        select(func.max(Widget.position)).where(Widget.workspace_id == workspace_id)
    )
    current = result.scalar_one_or_none()
    return 0 if current is None else current + 1


async def _check_artifact(db: AsyncSession, artifact_id: UUID, workspace_id: UUID) -> None:
    result = await db.execute(
        select(Artifact.id).where(Artifact.id == artifact_id, Artifact.workspace_id == workspace_id)
    )
    if result.scalar_one_or_none() is None:
        raise NotFound("Artifact not found")


async def _save(db: AsyncSession, widget: Widget, workspace_id: UUID) -> Widget:
    await touch_workspace(db, workspace_id)
    await db.commit()
    await db.refresh(widget)
    return widget


async def list_widgets(db: AsyncSession, workspace_id: UUID, identity: User | None) -> list[Widget]:
    workspace = await get_workspace(db, workspace_id, identity)
    result = await db.execute(
        select(Widget)
        .where(Widget.workspace_id == workspace.id)
        .order_by(Widget.position.asc(), Widget.created_at.desc())
    )
    return list(result.scalars())


async def create_widget(
    db: AsyncSession,
    workspace_id: UUID,
    data: WidgetCreate,
    identity: User | None,
) -> Widget:
    """Append a widget to the end of the workspace dashboard."""
    workspace = await get_workspace(db, workspace_id, identity)
    if data.artifact_id is not None:
        await _check_artifact(db, data.artifact_id, workspace.id)

    widget = Widget(
        workspace_id=workspace.id,
        artifact_id=data.artifact_id,
        kind=data.kind.value,
        title=data.title,
        content=data.content,
        config=data.config,
        position=await _next_position(db, workspace.id),
    )
    db.add(widget)
    return await _save(db, widget, workspace.id)


async def reorder_widgets(
    db: AsyncSession,
    positions: Sequence[WidgetPosition],
    identity: User | None,
) -> int:
    """
    Apply caller-supplied positions as one batch.

    Every referenced widget is loaded and authorized before the first write,
    so a single missing or foreign id fails the whole call. Widgets not named
    keep their positions.
    """
    if not positions:
        raise ValidationError("positions must not be empty")

    ids = {entry.id for entry in positions}
    result = await db.execute(
        select(Widget, Workspace)
        .join(Workspace, Widget.workspace_id == Workspace.id)
        .where(Widget.id.in_(ids))
    )
    rows = {widget.id: (widget, workspace) for widget, workspace in result.all()}

    missing = ids - rows.keys()
    if missing:
        raise NotFound("Widget not found")
    touched: set[UUID] = set()
    for widget, workspace in rows.values():
        authorize_workspace(workspace, identity)
        touched.add(workspace.id)

    for entry in positions:
        rows[entry.id][0].position = entry.position
    for workspace_id in touched:
        await touch_workspace(db, workspace_id)
    await db.commit()

    logger.info("Reordered %d widgets", len(ids))
    return len(ids)


async def refresh_widget(
    db: AsyncSession,
    widget_id: UUID,
    identity: User | None,
    generator: ChatService,
) -> Widget:
    """
    Regenerate a widget's content from its linked artifact.

    summary widgets are re-summarized, key_points widgets re-run the key-points
    prompt and action_items widgets re-scan the artifact text. Other kinds are
    not refreshable.
    """
    widget, workspace = await get_child(db, Widget, widget_id, identity)
    if widget.kind not in (WidgetKind.SUMMARY, WidgetKind.KEY_POINTS, WidgetKind.ACTION_ITEMS):
        raise NotRefreshable(f"Cannot refresh widgets of kind '{widget.kind}'")
    if widget.artifact_id is None:
        raise ValidationError("Widget has no associated artifact")

    artifact = await db.get(Artifact, widget.artifact_id)
    if artifact is None or not artifact.content:
        raise ValidationError("Artifact not found or has no content")

    if widget.kind == WidgetKind.SUMMARY:
        content = await generator.summarize(artifact.content, artifact.kind)
    elif widget.kind == WidgetKind.KEY_POINTS:
        content = await generator.extract_key_points(artifact.content)
    else:
        message = MailMessage(subject=artifact.name, text_body=artifact.content)
        result = action_items.extract_from_messages([message])
        content = action_items.render_markdown(result, widget.config.get("label_name"))
        items = result.items or result.to_review
        widget.config = {
            **widget.config,
            "items": [item.model_dump(by_alias=True) for item in items],
        }

    widget.content = content
    # updated_at advances on every successful refresh, even when content is unchanged
    widget.updated_at = datetime.now(timezone.utc)
    logger.info("Refreshed %s widget %s", widget.kind, widget.id)
    return await _save(db, widget, workspace.id)


async def update_widget(
    db: AsyncSession,
    widget_id: UUID,
    data: WidgetUpdate,
    identity: User | None,
) -> Widget:
    """Patch title/content and shallow-merge config. An empty body changes nothing."""
    widget, workspace = await get_child(db, Widget, widget_id, identity)
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        return widget

    if changes.get("config") is not None:
        widget.config = {**(widget.config or {}), **changes["config"]}
    if changes.get("content") is not None:
        widget.content = changes["content"]
    if changes.get("title") is not None:
        widget.title = changes["title"]
    return await _save(db, widget, workspace.id)


async def delete_widget(db: AsyncSession, widget_id: UUID, identity: User | None) -> None:
    widget, workspace = await get_child(db, Widget, widget_id, identity)
    await db.delete(widget)
    await touch_workspace(db, workspace.id)
    await db.commit()


async def create_action_items_widget(
    db: AsyncSession,
    workspace_id: UUID,
    data: ActionItemsWidgetRequest,
    identity: User | None,
) -> Widget:
    """
    Scan mailbox messages and pin the result as an action_items widget.

    config["items"] keeps the structured candidates and config["item_status"]
    starts empty; clients mark items done by patching item_status.
    """
    workspace = await get_workspace(db, workspace_id, identity)
    if data.source_binding_id is not None:
        result = await db.execute(
            select(SourceBinding.id).where(
                SourceBinding.id == data.source_binding_id,
                SourceBinding.workspace_id == workspace.id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFound("Source binding not found")

    extraction = action_items.extract_from_messages(data.messages)
    items = extraction.items or extraction.to_review
    title = data.title or (
        f"{data.label_name} - Action Items" if data.label_name else "Action Items"
    )

    widget = Widget(
        workspace_id=workspace.id,
        kind=WidgetKind.ACTION_ITEMS.value,
        title=title,
        content=action_items.render_markdown(extraction, data.label_name),
        config={
            "items": [item.model_dump(by_alias=True) for item in items],
            "item_status": {},
            "label_name": data.label_name,
            "source_binding_id": str(data.source_binding_id) if data.source_binding_id else None,
        },
        position=await _next_position(db, workspace.id),
    )
    db.add(widget)
    logger.info(
        "Created action-items widget with %d items from %d messages",
        len(extraction.items),
        extraction.scanned,
    )
    return await _save(db, widget, workspace.id)
