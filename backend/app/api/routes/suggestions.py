"""Suggestion routes."""

from uuid import UUID

from fastapi import APIRouter

from app.api.deps import DbSession, Identity
from app.schemas.base import SuccessResponse
from app.schemas.suggestions import SuggestionRead
from app.services import suggestions as suggestion_service
from app.services.access import get_workspace

router = APIRouter(tags=["suggestions"])


@router.get("/workspaces/{workspace_id}/suggestions", response_model=list[SuggestionRead])
async def list_suggestions(workspace_id: UUID, identity: Identity, db: DbSession) -> list[SuggestionRead]:
    """Current suggestion batch, in generation order."""
    workspace = await get_workspace(db, workspace_id, identity)
    suggestions = await suggestion_service.list_suggestions(db, workspace.id)
    return [SuggestionRead.model_validate(s) for s in suggestions]


@router.post("/workspaces/{workspace_id}/suggestions/regenerate", response_model=list[SuggestionRead])
async def regenerate_suggestions(
    workspace_id: UUID,
    identity: Identity,
    db: DbSession,
) -> list[SuggestionRead]:
    """
    Throw away the workspace's suggestions and compute a fresh batch.

    Running it again without changing bindings or artifacts yields the same
    suggestions in the same order (with new ids).
    """
    suggestions = await suggestion_service.regenerate(db, workspace_id, identity)
    return [SuggestionRead.model_validate(s) for s in suggestions]


@router.delete("/suggestions/{suggestion_id}", response_model=SuccessResponse)
async def delete_suggestion(suggestion_id: UUID, identity: Identity, db: DbSession) -> SuccessResponse:
    """Dismiss one suggestion. It comes back on the next regeneration."""
    await suggestion_service.delete_suggestion(db, suggestion_id, identity)
    return SuccessResponse()
