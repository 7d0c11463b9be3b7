"""User schemas."""

from datetime import datetime
from uuid import UUID

from app.schemas.base import BaseSchema


class UserRead(BaseSchema):
    """Schema for reading user data."""

    id: UUID
    email: str
    name: str | None
    avatar_url: str | None
    created_at: datetime
