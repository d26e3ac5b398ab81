# File: planner/schemas/task.py

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, AliasChoices, Field, StringConstraints, field_validator

from planner.schemas.common import CamelModel, PayloadModel
from planner.schemas.user import UserSummary

TaskName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
TaskDescription = Annotated[str, StringConstraints(max_length=500)]
TaskType = Literal["task", "milestone", "project"]

PROGRESS_RANGE_MESSAGE = "Progress must be a number between 0 and 100"


def check_progress(v: int) -> int:
    if v < 0 or v > 100:
        raise ValueError(PROGRESS_RANGE_MESSAGE)
    return v


Progress = Annotated[int, AfterValidator(check_progress)]


class TaskCreate(PayloadModel):
    project: str
    name: TaskName
    description: Optional[TaskDescription] = None
    start_date: datetime
    end_date: datetime
    progress: Progress = 0
    type: TaskType = "task"
    is_disabled: bool = False
    assigned_to: list[str] = []
    dependencies: list[str] = []


class TaskUpdate(PayloadModel):
    """
    Partial update for owners and members.

    ``project`` is immutable and assignment goes through the owner-only
    assign/unassign routes, so neither is accepted here.
    """

    name: Optional[TaskName] = None
    description: Optional[TaskDescription] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    progress: Optional[Progress] = None
    type: Optional[TaskType] = None
    is_disabled: Optional[bool] = None
    dependencies: Optional[list[str]] = None

    @field_validator("name", "start_date", "end_date", "progress", "type", "is_disabled", mode="before")
    @classmethod
    def reject_explicit_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class TaskProgressUpdate(PayloadModel):
    progress: Progress


class TaskAssign(PayloadModel):
    user_id: Optional[str] = None


class TaskDependencyRead(CamelModel):
    id: str
    name: str
    start_date: datetime
    end_date: datetime


class TaskRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    progress: int
    project_id: str = Field(
        validation_alias=AliasChoices("project_id", "project"),
        serialization_alias="project",
    )
    assigned_to: list[UserSummary] = []
    dependencies: list[TaskDependencyRead] = []
    type: str
    is_disabled: bool
    created_at: datetime
    updated_at: datetime


class GanttRow(CamelModel):
    """
    One bar of the Gantt chart. ``progress`` is a 0-1 ratio here, not a
    percentage.
    """

    id: str
    name: str
    start: datetime
    end: datetime
    progress: float
    type: Literal["task", "milestone", "project"]
    is_disabled: bool = False
    dependencies: list[str] = []
    project: Optional[str] = None
