"""Per-person, per-category task statistics.

Three independent signals, each on the 1-5 scale:

- completion rate        share of the person's tasks in the category completed
- difficulty adaptation  mean difficulty of the completed ones
- speed efficiency       estimated vs actual hours on completed, dated tasks

Each signal returns the neutral 3.0 when its filtered task set is empty.
All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from teampulse.engine.scoring import NEUTRAL_SCORE, clamp_score, mean
from teampulse.models import Task


WORK_HOURS_PER_DAY = 8
MIN_ACTUAL_HOURS = 0.1
_SECONDS_PER_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
class TaskStats(BaseModel):
    """Counts and signal scores for one (person, category) pair."""

    student_id: str
    category: str
    total_count: int = Field(ge=0)
    completed_count: int = Field(ge=0)
    has_speed_data: bool = False
    completion_rate: float = Field(ge=1.0, le=5.0)
    difficulty_adaptation: float = Field(ge=1.0, le=5.0)
    speed: float = Field(ge=1.0, le=5.0)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------
def category_tasks(student_id: str, category: str, tasks: Sequence[Task]) -> list[Task]:
    """Tasks in *category* assigned to *student_id*."""
    return [t for t in tasks if t.category == category and t.is_assigned_to(student_id)]


def completed_category_tasks(student_id: str, category: str, tasks: Sequence[Task]) -> list[Task]:
    return [t for t in category_tasks(student_id, category, tasks) if t.is_completed]


def timed_completed_tasks(student_id: str, category: str, tasks: Sequence[Task]) -> list[Task]:
    """Completed tasks that carry both a start and an end date."""
    return [
        t
        for t in completed_category_tasks(student_id, category, tasks)
        if t.start_date is not None and t.end_date is not None
    ]


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------
def completion_rate_score(student_id: str, category: str, tasks: Sequence[Task]) -> float:
    """``1 + 4 × completed / total``; 3.0 without tasks."""
    own = category_tasks(student_id, category, tasks)
    if not own:
        return NEUTRAL_SCORE
    completed = sum(1 for t in own if t.is_completed)
    return clamp_score(1 + 4 * (completed / len(own)))


def difficulty_adaptation_score(student_id: str, category: str, tasks: Sequence[Task]) -> float:
    """Mean difficulty of completed tasks; 3.0 when nothing is completed."""
    avg = mean(t.difficulty for t in completed_category_tasks(student_id, category, tasks))
    if avg is None:
        return NEUTRAL_SCORE
    return clamp_score(avg)


def task_efficiency(task: Task) -> float:
    """Estimated hours over actual hours (8 working hours per calendar day).

    Without an estimate the task counts as exactly on schedule.
    """
    if task.start_date is None or task.end_date is None:
        raise ValueError(f"Task '{task.task_id}' has no start/end date")
    actual_days = (task.end_date - task.start_date).total_seconds() / _SECONDS_PER_DAY
    actual_hours = actual_days * WORK_HOURS_PER_DAY
    estimated_hours = task.estimated_hours or actual_hours
    return estimated_hours / max(actual_hours, MIN_ACTUAL_HOURS)


def efficiency_to_score(efficiency: float) -> float:
    """Map an average efficiency onto the 1-5 scale around 3.0."""
    if efficiency >= 1.2:
        score = NEUTRAL_SCORE + (efficiency - 1.2) * 5
    elif efficiency >= 1.0:
        score = NEUTRAL_SCORE + (efficiency - 1.0) * 5
    else:
        score = NEUTRAL_SCORE - (1.0 - efficiency) * 10
    return clamp_score(score)


def speed_efficiency_score(student_id: str, category: str, tasks: Sequence[Task]) -> float:
    """Score from the mean efficiency of completed, dated tasks; 3.0 without any."""
    avg = mean(task_efficiency(t) for t in timed_completed_tasks(student_id, category, tasks))
    if avg is None:
        return NEUTRAL_SCORE
    return efficiency_to_score(avg)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
def summarize_task_stats(student_id: str, category: str, tasks: Sequence[Task]) -> TaskStats:
    """Compute all three signals plus the counts the blender needs."""
    own = category_tasks(student_id, category, tasks)
    completed = [t for t in own if t.is_completed]
    return TaskStats(
        student_id=student_id,
        category=category,
        total_count=len(own),
        completed_count=len(completed),
        has_speed_data=any(t.start_date is not None and t.end_date is not None for t in completed),
        completion_rate=completion_rate_score(student_id, category, tasks),
        difficulty_adaptation=difficulty_adaptation_score(student_id, category, tasks),
        speed=speed_efficiency_score(student_id, category, tasks),
    )
