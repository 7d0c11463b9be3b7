"""Workspace chat route."""

import logging
from uuid import UUID

from fastapi import APIRouter

from app.api.deps import DbSession, Identity, TextGenerator
from app.schemas.chat import ChatRequest, ChatResponse
from app.services import context as context_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/workspaces/{workspace_id}/chat", response_model=ChatResponse)
async def chat(
    workspace_id: UUID,
    request: ChatRequest,
    identity: Identity,
    db: DbSession,
    generator: TextGenerator,
) -> ChatResponse:
    """
    Ask a question about a workspace.

    The model sees the workspace description, its connected sources and the
    (truncated) content of every imported artifact.
    """
    history = [turn.model_dump() for turn in request.history]
    reply = await context_service.chat(db, workspace_id, identity, request.message, history, generator)
    logger.debug("Chat reply for workspace %s: %d chars", workspace_id, len(reply))
    return ChatResponse(message=reply)
