"""Source binding registry."""

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import BindingType, SourceBinding, User
from app.schemas.bindings import CONFIG_MODELS, BindingCreate, BindingUpdate
from app.services.access import get_child, get_workspace, touch_workspace
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)


def validate_config(binding_type: BindingType | str, config: dict[str, Any]) -> dict[str, Any]:
    """
    Check a config against the model for its binding type.

    Unknown keys pass through untouched; declared keys must have the right
    shape. Returns the config as stored (JSON-compatible).
    """
    binding_type = BindingType(binding_type)
    model = CONFIG_MODELS[binding_type]
    try:
        parsed = model.model_validate(config)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid config for {binding_type.value}: {field}: {first['msg']}"
        ) from e
    return {**config, **parsed.model_dump(mode="json", exclude_unset=True)}


async def list_bindings(db: AsyncSession, workspace_id: UUID, identity: User | None) -> list[SourceBinding]:
    workspace = await get_workspace(db, workspace_id, identity)
    result = await db.execute(
        select(SourceBinding)
        .where(SourceBinding.workspace_id == workspace.id)
        .order_by(SourceBinding.created_at, SourceBinding.id)
    )
    return list(result.scalars())


async def create_binding(
    db: AsyncSession,
    workspace_id: UUID,
    data: BindingCreate,
    identity: User | None,
) -> SourceBinding:
    workspace = await get_workspace(db, workspace_id, identity)
    binding = SourceBinding(
        workspace_id=workspace.id,
        type=data.type.value,
        name=data.name,
        config=validate_config(data.type, data.config),
    )
    db.add(binding)
    await touch_workspace(db, workspace.id)
    await db.commit()
    await db.refresh(binding)
    logger.info("Attached %s binding %s to workspace %s", binding.type, binding.id, workspace.id)
    return binding


async def update_binding(
    db: AsyncSession,
    binding_id: UUID,
    data: BindingUpdate,
    identity: User | None,
) -> SourceBinding:
    """Rename, replace config or change status. config is replaced, not merged."""
    binding, workspace = await get_child(db, SourceBinding, binding_id, identity)
    if data.name is not None:
        binding.name = data.name
    if data.config is not None:
        binding.config = validate_config(binding.type, data.config)
    if data.status is not None:
        binding.status = data.status.value
    await touch_workspace(db, workspace.id)
    await db.commit()
    await db.refresh(binding)
    return binding


async def delete_binding(db: AsyncSession, binding_id: UUID, identity: User | None) -> None:
    """Detach a source. Its artifacts and suggestions go with it."""
    binding, workspace = await get_child(db, SourceBinding, binding_id, identity)
    await db.delete(binding)
    await touch_workspace(db, workspace.id)
    await db.commit()
