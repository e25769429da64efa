"""Human-readable explanations for load and motivation scores.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from teampulse.engine.compatibility import team_compatibility
from teampulse.engine.load import active_tasks, days_until_deadline
from teampulse.engine.motivation import completion_ratio, own_tasks
from teampulse.models import Student, Task
from teampulse.personality_types import motivation_base_score


Severity = Literal["high", "medium", "low"]
Impact = Literal["positive", "negative", "neutral"]

HIGH_DIFFICULTY = 4
LONG_TASK_HOURS = 8
MANY_TASKS = 5
STRENGTH_LEVEL = 3.5
WEAKNESS_LEVEL = 2.5


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class LoadCause(BaseModel):
    """One contributor to a high load score."""

    cause: str
    severity: Severity
    description: str
    tasks: list[str] = Field(default_factory=list)


class LoadReason(BaseModel):
    main_causes: list[LoadCause]
    summary: str
    score: float


class MotivationFactor(BaseModel):
    """One contributor to a motivation score."""

    factor: str
    impact: Impact
    description: str
    score: float


class MotivationReason(BaseModel):
    factors: list[MotivationFactor]
    summary: str
    score: float


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------
def _titles(tasks: Iterable[Task]) -> list[str]:
    return [t.title or t.task_id for t in tasks]


def _count_severity(count: int, high_at: int, medium_at: int | None = None) -> Severity:
    if count >= high_at:
        return "high"
    if medium_at is None or count >= medium_at:
        return "medium"
    return "low"


def analyze_load_reason(
    tasks: Sequence[Task],
    load_score: float,
    as_of: datetime | date,
) -> LoadReason:
    """Explain *load_score* from a student's task list."""
    active = active_tasks(tasks)
    causes: list[LoadCause] = []

    overdue = [t for t in active if t.is_overdue(as_of)]
    if overdue:
        causes.append(LoadCause(
            cause="Overdue tasks",
            severity=_count_severity(len(overdue), high_at=3, medium_at=2),
            description=f"{len(overdue)} task(s) are past their deadline.",
            tasks=_titles(overdue),
        ))

    urgent = [
        t for t in active
        if (days := days_until_deadline(t, as_of)) is not None and 0 <= days < 1
    ]
    if urgent:
        causes.append(LoadCause(
            cause="Urgent tasks",
            severity=_count_severity(len(urgent), high_at=3),
            description=f"{len(urgent)} task(s) are due within a day.",
            tasks=_titles(urgent),
        ))

    hard = [t for t in active if t.difficulty >= HIGH_DIFFICULTY]
    if hard:
        causes.append(LoadCause(
            cause="High-difficulty tasks",
            severity=_count_severity(len(hard), high_at=2),
            description=f"{len(hard)} task(s) have difficulty {HIGH_DIFFICULTY} or more.",
            tasks=_titles(hard),
        ))

    long_tasks = [t for t in active if (t.estimated_hours or 0) >= LONG_TASK_HOURS]
    if long_tasks:
        causes.append(LoadCause(
            cause="Long tasks",
            severity=_count_severity(len(long_tasks), high_at=2),
            description=f"{len(long_tasks)} task(s) are estimated at {LONG_TASK_HOURS} hours or more.",
            tasks=_titles(long_tasks),
        ))

    if len(active) >= MANY_TASKS:
        causes.append(LoadCause(
            cause="Too many tasks",
            severity=_count_severity(len(active), high_at=7),
            description=f"{len(active)} tasks are open at the same time.",
            tasks=_titles(active[:MANY_TASKS]),
        ))

    return LoadReason(main_causes=causes, summary=_load_summary(load_score, causes), score=load_score)


def _load_summary(load_score: float, causes: list[LoadCause]) -> str:
    if load_score >= 4:
        summary = "Load is very high."
    elif load_score >= 3:
        summary = "Load is high."
    else:
        summary = "Load is within a healthy range."

    if not causes:
        return summary + " No specific contributing factors found."
    high = sum(1 for c in causes if c.severity == "high")
    if high:
        return summary + f" {high} major factor(s) identified."
    return summary + " Some contributing factors identified."


# ---------------------------------------------------------------------------
# Motivation
# ---------------------------------------------------------------------------
def generate_motivation_reason(
    student: Student,
    tasks: Sequence[Task],
    partner_ids: Iterable[str],
    motivation_score: float,
) -> MotivationReason:
    """Explain *motivation_score* for *student*."""
    mine = own_tasks(student, tasks)
    factors: list[MotivationFactor] = []

    # completion
    completed = sum(1 for t in mine if t.is_completed)
    ratio = completion_ratio(mine)
    progress = f"{completed}/{len(mine)} task(s) completed."
    if ratio >= 0.7:
        factors.append(MotivationFactor(
            factor="Completion rate",
            impact="positive",
            description=f"{progress} A high completion rate keeps motivation up.",
            score=ratio * 5,
        ))
    elif ratio < 0.4:
        factors.append(MotivationFactor(
            factor="Completion rate",
            impact="negative",
            description=f"{progress} A low completion rate may be weighing on motivation.",
            score=ratio * 5,
        ))
    else:
        factors.append(MotivationFactor(
            factor="Completion rate", impact="neutral", description=progress, score=ratio * 5,
        ))

    # task fit
    active = active_tasks(mine)
    if active:
        strengths = sorted(c for c, v in student.skills.items() if v >= STRENGTH_LEVEL)
        weaknesses = sorted(c for c, v in student.skills.items() if v <= WEAKNESS_LEVEL)
        on_strength = sum(1 for t in active if t.category in strengths)
        fit = on_strength / len(active)
        if fit >= 0.6:
            factors.append(MotivationFactor(
                factor="Task fit",
                impact="positive",
                description=(
                    f"{round(fit * 100)}% of current tasks match strengths "
                    f"({', '.join(strengths)})."
                ),
                score=fit * 5,
            ))
        elif fit < 0.3:
            weak_text = f" ({', '.join(weaknesses)})" if weaknesses else ""
            factors.append(MotivationFactor(
                factor="Task fit",
                impact="negative",
                description=(
                    f"Most current tasks fall outside the student's strengths{weak_text}. "
                    "Consider moving better-suited tasks their way."
                ),
                score=fit * 5,
            ))

    # team
    compat = team_compatibility(student, partner_ids)
    if compat.preferred_count > 0 and compat.avoided_count == 0:
        factors.append(MotivationFactor(
            factor="Team compatibility",
            impact="positive",
            description=f"Working with {compat.preferred_count} preferred partner(s).",
            score=4.0,
        ))
    elif compat.avoided_count > 0:
        factors.append(MotivationFactor(
            factor="Team compatibility",
            impact="negative",
            description=f"The team includes {compat.avoided_count} member(s) the student prefers to avoid.",
            score=2.0,
        ))

    # personality
    base = motivation_base_score(student.mbti)
    if base >= 3.5:
        factors.append(MotivationFactor(
            factor="Personality",
            impact="positive",
            description=f"Type {student.mbti} tends to stay engaged in outward-facing, idea-driven work.",
            score=base,
        ))
    elif base < 3.0:
        factors.append(MotivationFactor(
            factor="Personality",
            impact="negative",
            description=f"Type {student.mbti} leans introverted; active involvement may need encouragement.",
            score=base,
        ))

    return MotivationReason(
        factors=factors,
        summary=_motivation_summary(motivation_score, factors),
        score=motivation_score,
    )


def _motivation_summary(score: float, factors: list[MotivationFactor]) -> str:
    if score >= 4:
        summary = "Motivation is high."
    elif score >= 3:
        summary = "Motivation is moderate."
    else:
        summary = "Motivation is low."

    positive = sum(1 for f in factors if f.impact == "positive")
    negative = sum(1 for f in factors if f.impact == "negative")
    if positive > negative:
        summary += " Most factors are favourable."
    elif negative > positive:
        summary += " There are several areas to improve."
    return summary
