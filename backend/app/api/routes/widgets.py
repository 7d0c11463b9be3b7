"""Dashboard widget routes."""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import DbSession, Identity, TextGenerator
from app.schemas.base import SuccessResponse
from app.schemas.widgets import (
    ActionItemsWidgetRequest,
    ReorderResponse,
    WidgetCreate,
    WidgetRead,
    WidgetReorderRequest,
    WidgetUpdate,
)
from app.services import widgets as widget_service

router = APIRouter(tags=["widgets"])


@router.get("/workspaces/{workspace_id}/widgets", response_model=list[WidgetRead])
async def list_widgets(workspace_id: UUID, identity: Identity, db: DbSession) -> list[WidgetRead]:
    """Widgets in display order: position ascending, newest first on ties."""
    widgets = await widget_service.list_widgets(db, workspace_id, identity)
    return [WidgetRead.model_validate(w) for w in widgets]


@router.post(
    "/workspaces/{workspace_id}/widgets",
    response_model=WidgetRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_widget(
    workspace_id: UUID,
    data: WidgetCreate,
    identity: Identity,
    db: DbSession,
) -> WidgetRead:
    widget = await widget_service.create_widget(db, workspace_id, data, identity)
    return WidgetRead.model_validate(widget)


@router.post(
    "/workspaces/{workspace_id}/widgets/action-items",
    response_model=WidgetRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_action_items_widget(
    workspace_id: UUID,
    data: ActionItemsWidgetRequest,
    identity: Identity,
    db: DbSession,
) -> WidgetRead:
    """
    Build an action-items widget from mail messages.

    The caller passes the messages it fetched (most recent first); only the
    first few are scanned.
    """
    widget = await widget_service.create_action_items_widget(db, workspace_id, data, identity)
    return WidgetRead.model_validate(widget)


# Must be registered before /widgets/{widget_id} routes
@router.post("/widgets/reorder", response_model=ReorderResponse)
async def reorder_widgets(data: WidgetReorderRequest, identity: Identity, db: DbSession) -> ReorderResponse:
    """Apply new positions to the listed widgets, all or nothing."""
    updated = await widget_service.reorder_widgets(db, data.positions, identity)
    return ReorderResponse(updated=updated)


@router.patch("/widgets/{widget_id}", response_model=WidgetRead)
async def update_widget(
    widget_id: UUID,
    data: WidgetUpdate,
    identity: Identity,
    db: DbSession,
) -> WidgetRead:
    """Partial update; config keys are merged into the existing config."""
    widget = await widget_service.update_widget(db, widget_id, data, identity)
    return WidgetRead.model_validate(widget)


@router.post("/widgets/{widget_id}/refresh", response_model=WidgetRead)
async def refresh_widget(
    widget_id: UUID,
    identity: Identity,
    db: DbSession,
    generator: TextGenerator,
) -> WidgetRead:
    widget = await widget_service.refresh_widget(db, widget_id, identity, generator)
    return WidgetRead.model_validate(widget)


@router.delete("/widgets/{widget_id}", response_model=SuccessResponse)
async def delete_widget(widget_id: UUID, identity: Identity, db: DbSession) -> SuccessResponse:
    await widget_service.delete_widget(db, widget_id, identity)
    return SuccessResponse()
