# File: planner/models/project.py

"""
Project model.

The owner is referenced through ``owner_id`` and is never stored in
``members``; authorization treats the owner as implicitly included.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models.base import Base, IdentifiedMixin
from planner.models.user import User

if TYPE_CHECKING:
    from planner.models.task import Task


project_members = Table(
    "project_members",
    Base.metadata,
    Column("project_id", String(32), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Project(IdentifiedMixin, Base):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    owner_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id"), nullable=False, index=True
    )
    owner: Mapped[User] = relationship(User, lazy="joined")

    members: Mapped[list[User]] = relationship(
        User, secondary=project_members, order_by=User.name
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.start_date",
    )

    @property
    def member_ids(self) -> set[str]:
        return {member.id for member in self.members}

    def __repr__(self):
        return f"<Project {self.name} ({self.id})>"
