"""Workspace to-do list."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Task, User
from app.schemas.tasks import TaskCreate, TaskUpdate
from app.services.access import get_child, get_workspace, touch_workspace
from app.services.errors import ValidationError


async def list_tasks(db: AsyncSession, workspace_id: UUID, identity: User | None) -> list[Task]:
    workspace = await get_workspace(db, workspace_id, identity)
    result = await db.execute(
        select(Task).where(Task.workspace_id == workspace.id).order_by(Task.created_at.desc())
    )
    return list(result.scalars())


async def create_task(
    db: AsyncSession,
    workspace_id: UUID,
    data: TaskCreate,
    identity: User | None,
) -> Task:
    """Add a task, e.g. an action item promoted from a widget (source = widget title)."""
    workspace = await get_workspace(db, workspace_id, identity)
    if not data.text:
        raise ValidationError("Task text is required")

    task = Task(workspace_id=workspace.id, text=data.text, source=data.source)
    db.add(task)
    await touch_workspace(db, workspace.id)
    await db.commit()
    await db.refresh(task)
    return task


async def update_task(
    db: AsyncSession,
    task_id: UUID,
    data: TaskUpdate,
    identity: User | None,
) -> Task:
    """Set completed explicitly, or flip it when omitted."""
    task, workspace = await get_child(db, Task, task_id, identity)
    task.completed = (not task.completed) if data.completed is None else data.completed
    if data.text is not None:
        task.text = data.text
    await touch_workspace(db, workspace.id)
    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: UUID, identity: User | None) -> None:
    task, workspace = await get_child(db, Task, task_id, identity)
    await db.delete(task)
    await touch_workspace(db, workspace.id)
    await db.commit()
