# File: planner/api/v1/routes_task.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from planner.api.deps import get_current_user, get_db
from planner.core.errors import ValidationError
from planner.models.user import User
from planner.schemas.common import DataResponse, ListResponse
from planner.schemas.task import TaskAssign, TaskCreate, TaskProgressUpdate, TaskRead, TaskUpdate
from planner.services import task_service

router = APIRouter()


@router.get(
    "/project/{project_id}",
    response_model=ListResponse[TaskRead],
    summary="Tasks of a project",
)
def list_project_tasks(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tasks = task_service.list_tasks_for_project(db, current_user, project_id)
    return ListResponse(count=len(tasks), data=[TaskRead.model_validate(t) for t in tasks])


@router.post(
    "",
    response_model=DataResponse[TaskRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
@router.post(
    "/",
    response_model=DataResponse[TaskRead],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.create_task(db, current_user, payload)
    return DataResponse(data=TaskRead.model_validate(task))


@router.get("/{task_id}", response_model=DataResponse[TaskRead], summary="Get task")
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.get_task(db, current_user, task_id)
    return DataResponse(data=TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=DataResponse[TaskRead], summary="Update task")
def update_task(
    task_id: str,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.update_task(db, current_user, task_id, payload)
    return DataResponse(data=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=DataResponse[dict], summary="Delete task")
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task_service.delete_task(db, current_user, task_id)
    return DataResponse(data={})


@router.patch(
    "/{task_id}/progress",
    response_model=DataResponse[TaskRead],
    summary="Update only the progress of a task",
)
def update_task_progress(
    task_id: str,
    payload: TaskProgressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.update_progress(db, current_user, task_id, payload.progress)
    return DataResponse(data=TaskRead.model_validate(task))


@router.post("/{task_id}/assign", response_model=DataResponse[TaskRead], summary="Assign a user")
def assign_user(
    task_id: str,
    payload: TaskAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not payload.user_id:
        raise ValidationError("Please provide a user ID")
    task = task_service.assign_user(db, current_user, task_id, payload.user_id)
    return DataResponse(data=TaskRead.model_validate(task))


@router.delete(
    "/{task_id}/assign/{user_id}",
    response_model=DataResponse[TaskRead],
    summary="Unassign a user",
)
def unassign_user(
    task_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.unassign_user(db, current_user, task_id, user_id)
    return DataResponse(data=TaskRead.model_validate(task))
