# File: planner/services/project_service.py

"""
Project repository operations.

Each function receives the caller explicitly, loads what it needs, runs the
authorization check, then mutates and commits. Membership changes are a
plain read-check-write on the loaded project: two concurrent adds can both
pass the "already a member" check.
"""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from planner.core.errors import ConflictError, NotFoundError
from planner.core.logging import get_logger
from planner.models.project import Project
from planner.models.task import Task
from planner.models.user import User
from planner.schemas.project import ProjectCreate, ProjectUpdate
from planner.schemas.task import GanttRow
from planner.services import access
from planner.services.auth_service import get_user_by_email
from planner.services.progress import build_gantt_rows

logger = get_logger(__name__)

PROJECT_LOAD_OPTIONS = (
    selectinload(Project.members),
    selectinload(Project.tasks).selectinload(Task.assigned_to),
    selectinload(Project.tasks).selectinload(Task.dependencies),
)


def load_project(db: Session, project_id: str, message: str = "Project not found") -> Project:
    project = db.scalars(
        select(Project).where(Project.id == project_id).options(*PROJECT_LOAD_OPTIONS)
    ).first()
    if project is None:
        raise NotFoundError(message)
    return project


def list_projects(db: Session, caller: User) -> list[Project]:
    """
    Projects the caller owns or is a member of.
    """
    stmt = (
        select(Project)
        .where(or_(Project.owner_id == caller.id, Project.members.any(User.id == caller.id)))
        .options(selectinload(Project.members))
        .order_by(Project.created_at.desc(), Project.name)
    )
    return list(db.scalars(stmt).unique())


def get_project(db: Session, caller: User, project_id: str) -> Project:
    project = load_project(db, project_id)
    access.require_view(caller.id, project, "Not authorized to access this project")
    return project


def create_project(db: Session, caller: User, payload: ProjectCreate) -> Project:
    project = Project(owner_id=caller.id, **payload.model_dump())
    db.add(project)
    db.commit()
    logger.info("User %s created project %s", caller.id, project.id)
    return load_project(db, project.id)


def update_project(db: Session, caller: User, project_id: str, payload: ProjectUpdate) -> Project:
    project = load_project(db, project_id)
    access.require_modify_project(caller.id, project, "Not authorized to update this project")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(project, field, value)
    db.commit()
    return load_project(db, project_id)


def delete_project(db: Session, caller: User, project_id: str) -> None:
    project = load_project(db, project_id)
    access.require_modify_project(caller.id, project, "Not authorized to delete this project")

    db.delete(project)
    db.commit()
    logger.info("User %s deleted project %s", caller.id, project_id)


def add_member(db: Session, caller: User, project_id: str, email: str) -> Project:
    project = load_project(db, project_id)
    access.require_modify_project(caller.id, project, "Not authorized to add members to this project")

    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")

    # The owner counts as a member already and is never stored in the list.
    if access.is_owner_or_member(user.id, project):
        raise ConflictError("User is already a member of this project")

    project.members.append(user)
    db.commit()
    logger.info("User %s added member %s to project %s", caller.id, user.id, project_id)
    return load_project(db, project_id)


def remove_member(db: Session, caller: User, project_id: str, user_id: str) -> Project:
    """
    Removing someone who is not a member leaves the list unchanged.
    """
    project = load_project(db, project_id)
    access.require_modify_project(caller.id, project, "Not authorized to remove members from this project")

    remaining = [member for member in project.members if member.id != user_id]
    if len(remaining) != len(project.members):
        project.members = remaining
        db.commit()
        logger.info("User %s removed member %s from project %s", caller.id, user_id, project_id)
    return load_project(db, project_id)


def project_gantt(db: Session, caller: User, project_id: str) -> list[GanttRow]:
    project = get_project(db, caller, project_id)
    return build_gantt_rows(project, project.tasks)
