"""
FastAPI Dependencies for Authentication and Collaborators.

Key patterns:
1. get_current_identity: resolves the bearer session to a User, or None
2. Workspace-scoped access is enforced in app.services.access, never here
3. No global "current user" state - always pass the identity explicitly

Security model:
- Session id sent as 'Authorization: Bearer <session-id>'
- Absent or invalid tokens mean "anonymous"; public workspaces stay reachable
- Routes that only make sense signed in (e.g. /auth/me) check for None themselves
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import User
from app.db.session import get_db
from app.services.access import authenticate, parse_bearer
from app.services.chat_service import ChatService, chat_service


async def get_token_from_request(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """Extract the session token from the Authorization header, if any."""
    return parse_bearer(authorization)


async def get_current_identity(
    token: Annotated[str | None, Depends(get_token_from_request)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """
    Return the signed-in user, or None for anonymous callers.

    Unknown or expired sessions are treated exactly like a missing header.
    """
    return await authenticate(db, token)


def get_chat_service() -> ChatService:
    """Generative-text collaborator. Overridden in tests."""
    return chat_service


# Type aliases for dependency injection
Identity = Annotated[User | None, Depends(get_current_identity)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
TextGenerator = Annotated[ChatService, Depends(get_chat_service)]
SessionToken = Annotated[str | None, Depends(get_token_from_request)]
