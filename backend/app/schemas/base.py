"""Base schema configuration."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

# Opaque JSON object stored as-is (binding config, widget config, metadata)
JsonObject = dict[str, Any]


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class IDMixin(BaseModel):
    """Mixin for UUID primary key."""

    id: UUID


class CreatedAtMixin(BaseModel):
    """Mixin for entities that are never updated in place."""

    created_at: datetime


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at/updated_at timestamps."""

    updated_at: datetime


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a natural payload."""

    success: bool = True
