"""Motivation estimate (1-5) from task progress, task fit, team and personality.

Weights: completion 0.4, strength match 0.25, team compatibility 0.2,
personality base 0.15. All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from teampulse.engine.compatibility import team_compatibility
from teampulse.engine.scoring import WeightedComponent, clamp_score, weighted_average
from teampulse.models import Student, Task
from teampulse.personality_types import motivation_base_score


STRENGTH_THRESHOLD = 3.5


def own_tasks(student: Student, tasks: Sequence[Task]) -> list[Task]:
    return [t for t in tasks if t.is_assigned_to(student.student_id)]


def completion_ratio(tasks: Sequence[Task]) -> float:
    """Share of completed tasks; 0.5 with no tasks at all."""
    if not tasks:
        return 0.5
    return sum(1 for t in tasks if t.is_completed) / len(tasks)


def strength_match_score(student: Student, tasks: Sequence[Task]) -> float:
    """0-5 score for how well active tasks sit on the student's strengths.

    An active task counts only when the category skill is at least 3.5; it
    contributes ``skill/5 × difficulty/5``. The sum is averaged over *all*
    the student's tasks, completed ones included.
    """
    if not tasks:
        return 0.0
    total = 0.0
    for task in tasks:
        if task.is_completed:
            continue
        skill = student.skill_for(task.category)
        if skill >= STRENGTH_THRESHOLD:
            total += (skill / 5) * (task.difficulty / 5)
    return (total / len(tasks)) * 5


def motivation_components(
    student: Student,
    tasks: Sequence[Task],
    partner_ids: Iterable[str],
) -> list[WeightedComponent]:
    mine = own_tasks(student, tasks)
    return [
        WeightedComponent("completion", completion_ratio(mine) * 5, 0.4),
        WeightedComponent("strength_match", strength_match_score(student, mine), 0.25),
        WeightedComponent("compatibility", team_compatibility(student, partner_ids).score, 0.2),
        WeightedComponent("personality", motivation_base_score(student.mbti), 0.15),
    ]


def calculate_motivation(
    student: Student,
    tasks: Sequence[Task],
    partner_ids: Iterable[str] = (),
) -> float:
    """Estimate *student*'s motivation.

    Args:
        student: The student being scored.
        tasks: Task snapshot; only tasks assigned to the student are read.
        partner_ids: Ids of the people the student currently works with.

    Returns:
        Motivation score in [1, 5].
    """
    return clamp_score(weighted_average(motivation_components(student, tasks, partner_ids), fallback=3.0))


def estimate_motivation_from_progress(completed: int, in_progress: int, pending: int) -> float:
    """Quick estimate from status counts; 3.0 when there are no tasks."""
    total = completed + in_progress + pending
    if total <= 0:
        return 3.0
    progress_bonus = 0.5 if in_progress > 0 else 0.0
    return clamp_score((completed / total) * 4 + progress_bonus + 1)
