# File: planner/services/access.py

"""
Authorization checks for projects and tasks.

Every predicate is a pure function of the caller id and an already-loaded
project; none of them touch the database. The project owner is always
authorized for anything a member may do, even if they were also
(erroneously) stored as a member.

The ``require_*`` helpers raise ``ForbiddenError`` with the message the
caller will see when the predicate fails.
"""

from typing import Protocol

from planner.core.errors import ForbiddenError


class ProjectLike(Protocol):
    owner_id: str

    @property
    def member_ids(self) -> set[str]: ...


def is_owner(user_id: str, project: ProjectLike) -> bool:
    return user_id == project.owner_id


def is_owner_or_member(user_id: str, project: ProjectLike) -> bool:
    return is_owner(user_id, project) or user_id in project.member_ids


def can_view(caller_id: str, project: ProjectLike) -> bool:
    """Read access to the project, its tasks and its task listing."""
    return is_owner_or_member(caller_id, project)


def can_modify_project(caller_id: str, project: ProjectLike) -> bool:
    """Project update, delete, and member add/remove."""
    return is_owner(caller_id, project)


def can_modify_task(caller_id: str, project: ProjectLike) -> bool:
    """Task create, update and progress update."""
    return is_owner_or_member(caller_id, project)


def can_delete_or_assign_task(caller_id: str, project: ProjectLike) -> bool:
    """Task delete, assign and unassign."""
    return is_owner(caller_id, project)


def can_be_assigned(candidate_id: str, project: ProjectLike) -> bool:
    """Checked when an assignment is made, never re-checked afterwards."""
    return is_owner_or_member(candidate_id, project)


def require_view(caller_id: str, project: ProjectLike, message: str = "Not authorized to access this project") -> None:
    if not can_view(caller_id, project):
        raise ForbiddenError(message)


def require_modify_project(caller_id: str, project: ProjectLike, message: str = "Not authorized to update this project") -> None:
    if not can_modify_project(caller_id, project):
        raise ForbiddenError(message)


def require_modify_task(caller_id: str, project: ProjectLike, message: str = "Not authorized to update this task") -> None:
    if not can_modify_task(caller_id, project):
        raise ForbiddenError(message)


def require_delete_or_assign_task(caller_id: str, project: ProjectLike, message: str = "Not authorized to delete this task") -> None:
    if not can_delete_or_assign_task(caller_id, project):
        raise ForbiddenError(message)
