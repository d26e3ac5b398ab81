# File: planner/models/task.py

"""
Task model.

A task belongs to exactly one project and may point at other tasks as
dependencies. Dependencies are plain references: nothing checks them for
cycles or for crossing into another project.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models.base import Base, IdentifiedMixin
from planner.models.project import Project
from planner.models.user import User

TASK_TYPE_TASK = "task"
TASK_TYPE_MILESTONE = "milestone"
TASK_TYPE_PROJECT = "project"
TASK_TYPES = (TASK_TYPE_TASK, TASK_TYPE_MILESTONE, TASK_TYPE_PROJECT)


task_assignees = Table(
    "task_assignees",
    Base.metadata,
    Column("task_id", String(32), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

task_dependencies = Table(
    "task_dependencies",
    Base.metadata,
    Column("task_id", String(32), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("depends_on_id", String(32), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
)


class Task(IdentifiedMixin, Base):
    __tablename__ = "tasks"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default=TASK_TYPE_TASK)
    is_disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    project_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project: Mapped[Project] = relationship(Project, back_populates="tasks")

    assigned_to: Mapped[list[User]] = relationship(
        User, secondary=task_assignees, order_by=User.name
    )
    dependencies: Mapped[list["Task"]] = relationship(
        "Task",
        secondary=task_dependencies,
        primaryjoin=lambda: Task.id == task_dependencies.c.task_id,
        secondaryjoin=lambda: Task.id == task_dependencies.c.depends_on_id,
        back_populates="dependents",
    )
    # Reverse side, kept so deleting a task also clears rows that point at it.
    dependents: Mapped[list["Task"]] = relationship(
        "Task",
        secondary=task_dependencies,
        primaryjoin=lambda: Task.id == task_dependencies.c.depends_on_id,
        secondaryjoin=lambda: Task.id == task_dependencies.c.task_id,
        back_populates="dependencies",
    )

    @property
    def assignee_ids(self) -> set[str]:
        return {user.id for user in self.assigned_to}

    def __repr__(self):
        return f"<Task {self.name} ({self.id})>"
