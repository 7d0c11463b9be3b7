"""Pydantic schemas for workspace chat."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """One earlier message of the conversation."""

    role: Literal["user", "assistant", "model"]
    content: str


class ChatRequest(BaseModel):
    """Request to send a chat message."""

    message: str = Field(..., min_length=1, max_length=10000)
    history: list[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Assistant reply."""

    message: str
