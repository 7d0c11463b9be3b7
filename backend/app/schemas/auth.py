"""Authentication schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import BaseSchema
from app.schemas.user import UserRead


class GoogleAuthRequest(BaseSchema):
    """Request schema for Google sign-in."""

    id_token: str = Field(..., description="Google OAuth id_token from frontend")


class SessionResponse(BaseSchema):
    """Response schema for successful sign-in."""

    session_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserRead


class MeResponse(BaseSchema):
    """Current identity; user is null for anonymous callers."""

    user: UserRead | None = None
