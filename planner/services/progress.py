# File: planner/services/progress.py

"""
Project progress and Gantt rows.

Project progress is the plain mean of its tasks' completion: every task
counts once, whatever its length, type or disabled flag.
"""

from typing import Protocol, Sequence

from planner.models.project import Project
from planner.models.task import TASK_TYPE_MILESTONE, TASK_TYPE_TASK, Task
from planner.schemas.task import GanttRow


class HasProgress(Protocol):
    progress: int


def aggregate_progress(tasks: Sequence[HasProgress]) -> float:
    """
    Return the project completion ratio in [0, 1].

    ``sum(progress) / (len(tasks) * 100)``; an empty project is 0.
    """
    if not tasks:
        return 0
    return sum(task.progress for task in tasks) / (len(tasks) * 100)


def task_to_gantt_row(task: Task) -> GanttRow:
    # The chart only distinguishes milestones from ordinary bars.
    bar_type = TASK_TYPE_MILESTONE if task.type == TASK_TYPE_MILESTONE else TASK_TYPE_TASK
    return GanttRow(
        id=task.id,
        name=task.name,
        start=task.start_date,
        end=task.end_date,
        progress=task.progress / 100,
        type=bar_type,
        is_disabled=task.is_disabled,
        dependencies=[dep.id for dep in task.dependencies],
        project=task.project_id,
    )


def build_gantt_rows(project: Project, tasks: Sequence[Task]) -> list[GanttRow]:
    """
    Project summary bar first, then one bar per task in the given order.
    """
    summary = GanttRow(
        id=project.id,
        name=project.name,
        start=project.start_date,
        end=project.end_date,
        progress=aggregate_progress(tasks),
        type="project",
        is_disabled=False,
    )
    return [summary, *(task_to_gantt_row(task) for task in tasks)]
