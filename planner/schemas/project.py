# File: planner/schemas/project.py

from datetime import datetime
from typing import Annotated, Optional

from pydantic import EmailStr, StringConstraints, field_validator

from planner.schemas.common import CamelModel, PayloadModel
from planner.schemas.task import TaskRead
from planner.schemas.user import UserSummary

ProjectName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
ProjectDescription = Annotated[str, StringConstraints(min_length=1, max_length=500)]


class ProjectCreate(PayloadModel):
    name: ProjectName
    description: ProjectDescription
    start_date: datetime
    end_date: datetime


class ProjectUpdate(PayloadModel):
    """
    Partial update; only the fields listed here may change.
    Ownership and membership have their own routes.
    """

    name: Optional[ProjectName] = None
    description: Optional[ProjectDescription] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("name", "description", "start_date", "end_date", mode="before")
    @classmethod
    def reject_explicit_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class MemberAdd(PayloadModel):
    email: Optional[EmailStr] = None


class ProjectRead(CamelModel):
    id: str
    name: str
    description: str
    start_date: datetime
    end_date: datetime
    owner: UserSummary
    members: list[UserSummary] = []
    created_at: datetime
    updated_at: datetime


class ProjectDetail(ProjectRead):
    tasks: list[TaskRead] = []
    progress: float = 0.0
