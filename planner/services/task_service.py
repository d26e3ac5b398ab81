# File: planner/services/task_service.py

"""
Task repository operations.

Owners and members may create and edit tasks; only the project owner may
delete them or change who is assigned.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from planner.core.errors import ConflictError, NotFoundError, ValidationError
from planner.core.logging import get_logger
from planner.models.project import Project
from planner.models.task import Task
from planner.models.user import User
from planner.schemas.task import TaskCreate, TaskUpdate
from planner.services import access

logger = get_logger(__name__)

TASK_LOAD_OPTIONS = (
    selectinload(Task.assigned_to),
    selectinload(Task.dependencies),
)

NOT_ASSIGNABLE_MESSAGE = "User must be a member of the project to be assigned to a task"


def load_task(db: Session, task_id: str) -> Task:
    task = db.scalars(select(Task).where(Task.id == task_id).options(*TASK_LOAD_OPTIONS)).first()
    if task is None:
        raise NotFoundError("Task not found")
    return task


def load_parent_project(db: Session, task: Task) -> Project:
    project = db.scalars(
        select(Project).where(Project.id == task.project_id).options(selectinload(Project.members))
    ).first()
    if project is None:
        raise NotFoundError("Associated project not found")
    return project


def load_project_for_tasks(db: Session, project_id: str) -> Project:
    project = db.scalars(
        select(Project).where(Project.id == project_id).options(selectinload(Project.members))
    ).first()
    if project is None:
        raise NotFoundError("Project not found")
    return project


def resolve_dependencies(db: Session, dependency_ids: list[str]) -> list[Task]:
    """
    Look up dependency tasks by id. Existence is required; cycles and
    cross-project references are not checked.
    """
    unique_ids = list(dict.fromkeys(dependency_ids))
    if not unique_ids:
        return []
    found = {task.id: task for task in db.scalars(select(Task).where(Task.id.in_(unique_ids)))}
    missing = [dep_id for dep_id in unique_ids if dep_id not in found]
    if missing:
        raise NotFoundError(f"Dependency task not found: {missing[0]}")
    return [found[dep_id] for dep_id in unique_ids]


def resolve_assignees(db: Session, project: Project, user_ids: list[str]) -> list[User]:
    users = []
    for user_id in dict.fromkeys(user_ids):
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not access.can_be_assigned(user.id, project):
            raise ValidationError(NOT_ASSIGNABLE_MESSAGE)
        users.append(user)
    return users


def list_tasks_for_project(db: Session, caller: User, project_id: str) -> list[Task]:
    project = load_project_for_tasks(db, project_id)
    access.require_view(caller.id, project, "Not authorized to access tasks for this project")

    stmt = (
        select(Task)
        .where(Task.project_id == project_id)
        .options(*TASK_LOAD_OPTIONS)
        .order_by(Task.start_date, Task.name)
    )
    return list(db.scalars(stmt))


def get_task(db: Session, caller: User, task_id: str) -> Task:
    task = load_task(db, task_id)
    project = load_parent_project(db, task)
    access.require_view(caller.id, project, "Not authorized to access this task")
    return task


def create_task(db: Session, caller: User, payload: TaskCreate) -> Task:
    project = load_project_for_tasks(db, payload.project)
    access.require_modify_task(caller.id, project, "Not authorized to create tasks for this project")

    data = payload.model_dump(exclude={"project", "assigned_to", "dependencies"})
    task = Task(project_id=project.id, **data)
    task.assigned_to = resolve_assignees(db, project, payload.assigned_to)
    task.dependencies = resolve_dependencies(db, payload.dependencies)

    db.add(task)
    db.commit()
    logger.info("User %s created task %s in project %s", caller.id, task.id, project.id)
    return load_task(db, task.id)


def update_task(db: Session, caller: User, task_id: str, payload: TaskUpdate) -> Task:
    task = load_task(db, task_id)
    project = load_parent_project(db, task)
    access.require_modify_task(caller.id, project, "Not authorized to update this task")

    changes = payload.model_dump(exclude_unset=True)
    if "dependencies" in changes:
        task.dependencies = resolve_dependencies(db, changes.pop("dependencies") or [])
    for field, value in changes.items():
        setattr(task, field, value)

    db.commit()
    return load_task(db, task_id)


def update_progress(db: Session, caller: User, task_id: str, progress: int) -> Task:
    """
    ``progress`` has already been range-checked by the request schema.
    """
    task = load_task(db, task_id)
    project = load_parent_project(db, task)
    access.require_modify_task(caller.id, project, "Not authorized to update this task")

    task.progress = progress
    db.commit()
    return load_task(db, task_id)


def delete_task(db: Session, caller: User, task_id: str) -> None:
    task = load_task(db, task_id)
    project = load_parent_project(db, task)
    access.require_delete_or_assign_task(caller.id, project, "Not authorized to delete this task")

    db.delete(task)
    db.commit()
    logger.info("User %s deleted task %s", caller.id, task_id)


def assign_user(db: Session, caller: User, task_id: str, user_id: str) -> Task:
    task = load_task(db, task_id)

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    project = load_parent_project(db, task)
    access.require_delete_or_assign_task(caller.id, project, "Not authorized to assign users to this task")

    if not access.can_be_assigned(user.id, project):
        raise ValidationError(NOT_ASSIGNABLE_MESSAGE)
    if user.id in task.assignee_ids:
        raise ConflictError("User is already assigned to this task")

    task.assigned_to.append(user)
    db.commit()
    logger.info("User %s assigned %s to task %s", caller.id, user.id, task_id)
    return load_task(db, task_id)


def unassign_user(db: Session, caller: User, task_id: str, user_id: str) -> Task:
    """
    Unassigning someone who is not assigned leaves the task unchanged.
    """
    task = load_task(db, task_id)
    project = load_parent_project(db, task)
    access.require_delete_or_assign_task(caller.id, project, "Not authorized to unassign users from this task")

    remaining = [user for user in task.assigned_to if user.id != user_id]
    if len(remaining) != len(task.assigned_to):
        task.assigned_to = remaining
        db.commit()
        logger.info("User %s unassigned %s from task %s", caller.id, user_id, task_id)
    return load_task(db, task_id)
