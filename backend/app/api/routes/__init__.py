"""API routes package."""

from app.api.routes import (
    artifacts,
    auth,
    bindings,
    chat,
    suggestions,
    tasks,
    widgets,
    workspaces,
)

__all__ = [
    "artifacts",
    "auth",
    "bindings",
    "chat",
    "suggestions",
    "tasks",
    "widgets",
    "workspaces",
]
