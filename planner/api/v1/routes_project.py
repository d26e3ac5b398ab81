# File: planner/api/v1/routes_project.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from planner.api.deps import get_current_user, get_db
from planner.core.errors import ValidationError
from planner.models.user import User
from planner.schemas.common import DataResponse, ListResponse
from planner.schemas.project import (
    MemberAdd,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectUpdate,
)
from planner.schemas.task import GanttRow
from planner.services import project_service
from planner.services.progress import aggregate_progress

router = APIRouter()


@router.get(
    "",
    response_model=ListResponse[ProjectRead],
    summary="List projects the caller owns or belongs to",
)
@router.get("/", response_model=ListResponse[ProjectRead], include_in_schema=False)
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    projects = project_service.list_projects(db, current_user)
    return ListResponse(
        count=len(projects),
        data=[ProjectRead.model_validate(p) for p in projects],
    )


@router.post(
    "",
    response_model=DataResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
@router.post(
    "/",
    response_model=DataResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = project_service.create_project(db, current_user, payload)
    return DataResponse(data=ProjectRead.model_validate(project))


@router.get(
    "/{project_id}",
    response_model=DataResponse[ProjectDetail],
    summary="Project with members, tasks and overall progress",
)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = project_service.get_project(db, current_user, project_id)
    detail = ProjectDetail.model_validate(project)
    detail.progress = aggregate_progress(project.tasks)
    return DataResponse(data=detail)


@router.get(
    "/{project_id}/gantt",
    response_model=ListResponse[GanttRow],
    summary="Gantt chart rows: project summary bar followed by task bars",
)
def get_project_gantt(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = project_service.project_gantt(db, current_user, project_id)
    return ListResponse(count=len(rows), data=rows)


@router.put("/{project_id}", response_model=DataResponse[ProjectRead], summary="Update project")
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = project_service.update_project(db, current_user, project_id, payload)
    return DataResponse(data=ProjectRead.model_validate(project))


@router.delete("/{project_id}", response_model=DataResponse[dict], summary="Delete project")
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project_service.delete_project(db, current_user, project_id)
    return DataResponse(data={})


@router.post(
    "/{project_id}/members",
    response_model=DataResponse[ProjectRead],
    summary="Add a member by email",
)
def add_member(
    project_id: str,
    payload: MemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not payload.email:
        raise ValidationError("Please provide an email")
    project = project_service.add_member(db, current_user, project_id, payload.email)
    return DataResponse(data=ProjectRead.model_validate(project))


@router.delete(
    "/{project_id}/members/{user_id}",
    response_model=DataResponse[ProjectRead],
    summary="Remove a member",
)
def remove_member(
    project_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = project_service.remove_member(db, current_user, project_id, user_id)
    return DataResponse(data=ProjectRead.model_validate(project))
