"""Task (to-do) routes."""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import DbSession, Identity
from app.schemas.base import SuccessResponse
from app.schemas.tasks import TaskCreate, TaskRead, TaskUpdate
from app.services import tasks as task_service

router = APIRouter(tags=["tasks"])


@router.get("/workspaces/{workspace_id}/tasks", response_model=list[TaskRead])
async def list_tasks(workspace_id: UUID, identity: Identity, db: DbSession) -> list[TaskRead]:
    """Tasks of a workspace, newest first."""
    tasks = await task_service.list_tasks(db, workspace_id, identity)
    return [TaskRead.model_validate(t) for t in tasks]


@router.post(
    "/workspaces/{workspace_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(workspace_id: UUID, data: TaskCreate, identity: Identity, db: DbSession) -> TaskRead:
    task = await task_service.create_task(db, workspace_id, data, identity)
    return TaskRead.model_validate(task)


@router.patch("/tasks/{task_id}", response_model=TaskRead)
async def update_task(task_id: UUID, data: TaskUpdate, identity: Identity, db: DbSession) -> TaskRead:
    """Mark a task done/undone. Without 'completed' in the body the state is toggled."""
    task = await task_service.update_task(db, task_id, data, identity)
    return TaskRead.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=SuccessResponse)
async def delete_task(task_id: UUID, identity: Identity, db: DbSession) -> SuccessResponse:
    await task_service.delete_task(db, task_id, identity)
    return SuccessResponse()
