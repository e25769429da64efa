"""Task reassignment recommender.

Finds open tasks whose assignee is overloaded, unmotivated or under-skilled
and proposes the best-suited teammate to take them over. All functions are
*pure*; the only side effect is logging.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Literal

from pydantic import BaseModel, Field

from teampulse.config import ReassignmentSettings
from teampulse.engine.compatibility import partner_adjustment, prefers
from teampulse.engine.scoring import clamp, round_half_up
from teampulse.models import CORE_TASK_CATEGORIES, Student, Task


logger = logging.getLogger(__name__)

Priority = Literal["high", "medium", "low"]

MAX_LOAD_BONUS = 30.0
MAX_SKILL_BONUS = 30.0
MAX_MOTIVATION_BONUS = 20.0
HIGH_DIFFICULTY = 4


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class ReassignmentSuggestion(BaseModel):
    """A proposal to move one task from its assignee to a teammate."""

    task_id: str
    task_title: str
    from_student_id: str
    from_student_name: str
    to_student_id: str
    to_student_name: str
    reason: str
    priority: Priority
    score: int = Field(ge=0, le=100)


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------
def category_skill(student: Student, category: str) -> float | None:
    """Skill for a core task category, ``None`` for any other category."""
    if category not in CORE_TASK_CATEGORIES:
        return None
    return student.skill_for(category)


def has_required_skill(student: Student, category: str, settings: ReassignmentSettings) -> bool:
    skill = category_skill(student, category)
    return skill is None or skill >= settings.skill_trigger


def needs_reassignment(student: Student, task: Task, settings: ReassignmentSettings) -> bool:
    return (
        student.load_score >= settings.load_trigger
        or student.motivation_score <= settings.motivation_trigger
        or not has_required_skill(student, task.category, settings)
    )


def determine_priority(current: Student) -> Priority:
    if current.load_score >= 4.5 or current.motivation_score <= 1.5:
        return "high"
    if current.load_score >= 4 or current.motivation_score <= 2:
        return "medium"
    return "low"


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def reassignment_score(
    candidate: Student,
    task: Task,
    current: Student,
    settings: ReassignmentSettings | None = None,
) -> int:
    """Suitability of *candidate* to take *task* over from *current* (0-100)."""
    settings = settings or ReassignmentSettings()

    score = clamp((current.load_score - candidate.load_score) * 10, 0.0, MAX_LOAD_BONUS)

    skill = category_skill(candidate, task.category)
    if skill is not None:
        score += skill / 5 * MAX_SKILL_BONUS

    score += candidate.motivation_score / 5 * MAX_MOTIVATION_BONUS
    score += partner_adjustment(current, candidate, settings.preferred_bonus, settings.avoided_penalty)

    if candidate.load_score < current.load_score:
        score += settings.load_order_bonus

    return int(round_half_up(clamp(score, 0.0, 100.0), 0))


def _format_score(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"


def build_reason(candidate: Student, task: Task, current: Student) -> str:
    """Readable justification naming the numbers behind the suggestion."""
    cand = candidate.name or candidate.student_id
    curr = current.name or current.student_id
    clauses: list[str] = []

    load_gap = current.load_score - candidate.load_score
    if load_gap > 0.5:
        clauses.append(
            f"{cand}'s load ({_format_score(candidate.load_score)}) is well below "
            f"{curr}'s ({_format_score(current.load_score)})"
        )
    elif load_gap > 0:
        clauses.append(f"{cand} has a slightly lighter load than {curr}")

    motivation_gap = candidate.motivation_score - current.motivation_score
    if motivation_gap > 0.5:
        clauses.append(
            f"{cand}'s motivation ({_format_score(candidate.motivation_score)}) is higher "
            f"than {curr}'s ({_format_score(current.motivation_score)})"
        )

    candidate_skill = category_skill(candidate, task.category)
    current_skill = category_skill(current, task.category)
    if candidate_skill is not None and current_skill is not None:
        if candidate_skill - current_skill > 0.5 or (candidate_skill >= 3 and current_skill < 3):
            clauses.append(
                f"{cand} is stronger in {task.category} "
                f"({_format_score(candidate_skill)} vs {_format_score(current_skill)})"
            )

    if prefers(current, candidate):
        clauses.append(f"{curr} lists {cand} as a preferred partner")

    if task.estimated_hours:
        clauses.append(f"the task is estimated at {task.estimated_hours:g} hours")

    if task.difficulty >= HIGH_DIFFICULTY:
        clauses.append(f"the task is demanding (difficulty {task.difficulty})")

    if not clauses:
        return "Suggested to balance load and improve skill fit."
    reason = ". ".join(clauses)
    return reason[0].upper() + reason[1:] + "."


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def _current_assignee(task: Task, by_id: dict[str, Student]) -> Student | None:
    for assignee_id in task.assignee_ids:
        student = by_id.get(assignee_id)
        if student is not None:
            return student
    return None


def suggest_task_reassignments(
    students: Sequence[Student],
    tasks: Sequence[Task],
    settings: ReassignmentSettings | None = None,
) -> list[ReassignmentSuggestion]:
    """Propose reassignments for every open task that needs one.

    Args:
        students: Every student that may hold or receive a task.
        tasks: Task snapshot; completed tasks are ignored.
        settings: Thresholds and bonuses; defaults when omitted.

    Returns:
        Suggestions sorted by score, best first. Ties keep task order.
    """
    settings = settings or ReassignmentSettings()
    by_id: dict[str, Student] = {}
    for s in students:
        by_id.setdefault(s.student_id, s)

    suggestions: list[ReassignmentSuggestion] = []
    for task in tasks:
        if task.is_completed:
            continue

        current = _current_assignee(task, by_id)
        if current is None:
            logger.debug("Skipping task %s: no known assignee", task.task_id)
            continue

        if not needs_reassignment(current, task, settings):
            continue

        teammates = [
            s for s in students
            if s.team_id == current.team_id and s.student_id != current.student_id
        ]
        if not current.team_id or not teammates:
            logger.debug("Skipping task %s: %s has no teammates", task.task_id, current.student_id)
            continue

        scored = [(s, reassignment_score(s, task, current, settings)) for s in teammates]
        best, best_score = sorted(scored, key=lambda pair: pair[1], reverse=True)[0]
        if best_score <= settings.suggest_threshold:
            logger.debug(
                "No suggestion for task %s: best score %d <= %s",
                task.task_id, best_score, settings.suggest_threshold,
            )
            continue

        suggestions.append(ReassignmentSuggestion(
            task_id=task.task_id,
            task_title=task.title,
            from_student_id=current.student_id,
            from_student_name=current.name,
            to_student_id=best.student_id,
            to_student_name=best.name,
            reason=build_reason(best, task, current),
            priority=determine_priority(current),
            score=best_score,
        ))

    logger.info("Generated %d reassignment suggestion(s) for %d task(s)", len(suggestions), len(tasks))
    return sorted(suggestions, key=lambda s: s.score, reverse=True)
