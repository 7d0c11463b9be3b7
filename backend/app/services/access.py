"""
Session authentication and workspace ownership checks.

Security model:
- A bearer token is an opaque session id; unknown or expired tokens resolve
  to "no identity" rather than an error (anonymous callers may still reach
  public workspaces).
- Every workspace is either Owned(user) or Public. Public workspaces are
  readable and writable by anyone; owned ones only by their owner.
- Child entities are always loaded together with their owning workspace
  (one join) and pass through the same policy. Missing entities fail with
  NotFound before any ownership check.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.models import Artifact, Session, SourceBinding, Suggestion, Task, User, Widget, Workspace
from app.services.errors import AccessDenied, NotFound

settings = get_settings()

ChildT = TypeVar("ChildT", SourceBinding, Artifact, Suggestion, Widget, Task)

_LABELS = {
    SourceBinding: "Source binding",
    Artifact: "Artifact",
    Suggestion: "Suggestion",
    Widget: "Widget",
    Task: "Task",
}


# =============================================================================
# OWNERSHIP
# =============================================================================


class Public(BaseModel):
    """Workspace without an owner (legacy mode)."""

    model_config = ConfigDict(frozen=True)


class Owned(BaseModel):
    """Workspace restricted to a single user."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID


Ownership = Owned | Public


def ownership_of(workspace: Workspace) -> Ownership:
    if workspace.owner_user_id is None:
        return Public()
    return Owned(user_id=workspace.owner_user_id)


def can_access(ownership: Ownership, identity: User | None) -> bool:
    if isinstance(ownership, Public):
        return True
    return identity is not None and identity.id == ownership.user_id


def authorize_workspace(workspace: Workspace | None, identity: User | None) -> Workspace:
    """
    Apply the ownership policy to a loaded workspace.

    Raises NotFound for a missing workspace and AccessDenied when the caller
    is not the owner of an owned workspace (anonymous included).
    """
    if workspace is None:
        raise NotFound("Workspace not found")
    if not can_access(ownership_of(workspace), identity):
        raise AccessDenied()
    return workspace


def visible_to(identity: User | None):
    """SQL filter matching the workspaces an identity may list."""
    if identity is None:
        return Workspace.owner_user_id.is_(None)
    return or_(Workspace.owner_user_id.is_(None), Workspace.owner_user_id == identity.id)


async def get_workspace(db: AsyncSession, workspace_id: UUID, identity: User | None) -> Workspace:
    result = await db.execute(select(Workspace).where(Workspace.id == workspace_id))
    return authorize_workspace(result.scalar_one_or_none(), identity)


async def get_child(
    db: AsyncSession,
    model: type[ChildT],
    entity_id: UUID,
    identity: User | None,
) -> tuple[ChildT, Workspace]:
    """
    Load a workspace-scoped entity and its workspace, then authorize.

    Usage:
        widget, workspace = await get_child(db, Widget, widget_id, identity)
    """
    result = await db.execute(
        select(model, Workspace)
        .join(Workspace, model.workspace_id == Workspace.id)
        .where(model.id == entity_id)
    )
    row = result.one_or_none()
    if row is None:
        raise NotFound(f"{_LABELS[model]} not found")
    entity, workspace = row
    authorize_workspace(workspace, identity)
    return entity, workspace


async def touch_workspace(db: AsyncSession, workspace_id: UUID) -> None:
    """Bump a workspace's updated_at after one of its children changed."""
    await db.execute(
        update(Workspace)
        .where(Workspace.id == workspace_id)
        .values(updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )


# =============================================================================
# SESSIONS
# =============================================================================


def parse_bearer(authorization: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


async def authenticate(db: AsyncSession, token: str | None) -> User | None:
    """Resolve a session token to its user. Fails soft: returns None."""
    if not token:
        return None
    now = datetime.now(timezone.utc)
    result = await db.execute(
        select(User)
        .join(Session, Session.user_id == User.id)
        .where(Session.id == token, Session.expires_at > now)
    )
    return result.scalar_one_or_none()


async def create_session(db: AsyncSession, user: User) -> Session:
    """Mint a new opaque session for a user."""
    session = Session(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=settings.session_expire_minutes),
    )
    db.add(session)
    await db.flush()
    return session


async def revoke_session(db: AsyncSession, token: str) -> None:
    await db.execute(delete(Session).where(Session.id == token))
