"""Attrition-risk ("danger") scoring.

Weighted blend of six risk signals on the 1-5 scale. All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from teampulse.engine.scoring import WeightedComponent, clamp_score, weighted_average
from teampulse.models import Student, Task


DangerLevel = Literal["safe", "caution", "warning", "critical"]

# Signals the data store does not measure yet use these defaults.
DEFAULT_SKILL_GAP = 0.3
DEFAULT_RECENT_ACTIVITY = 0.7
DEFAULT_COMMUNICATION_GAP = 0.2


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class RiskFactors(BaseModel):
    """Inputs to the danger score."""

    motivation_score: float = Field(ge=1.0, le=5.0)
    load_score: float = Field(ge=1.0, le=5.0)
    overdue_tasks: int = Field(default=0, ge=0)
    skill_gap: float = Field(default=DEFAULT_SKILL_GAP, ge=0.0, le=1.0)
    recent_activity: float = Field(default=DEFAULT_RECENT_ACTIVITY, ge=0.0, le=1.0)
    communication_gap: float = Field(default=DEFAULT_COMMUNICATION_GAP, ge=0.0, le=1.0)


class StudentDanger(BaseModel):
    """One row of the danger ranking."""

    student_id: str
    name: str
    danger_score: float = Field(ge=1.0, le=5.0)
    level: DangerLevel
    factors: RiskFactors


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def danger_components(factors: RiskFactors) -> list[WeightedComponent]:
    return [
        WeightedComponent("motivation", 6 - factors.motivation_score, 0.3),
        WeightedComponent("load", factors.load_score, 0.25),
        WeightedComponent("overdue", min(5.0, factors.overdue_tasks * 1.5), 0.2),
        WeightedComponent("skill_gap", factors.skill_gap * 5, 0.1),
        WeightedComponent("activity", (1 - factors.recent_activity) * 5, 0.1),
        WeightedComponent("communication", factors.communication_gap * 5, 0.05),
    ]


def calculate_danger_score(factors: RiskFactors) -> float:
    """Return the attrition-risk score (1-5); higher is riskier."""
    return clamp_score(weighted_average(danger_components(factors), fallback=3.0))


def get_danger_level(score: float) -> DangerLevel:
    if score < 2:
        return "safe"
    if score < 3:
        return "caution"
    if score < 4:
        return "warning"
    return "critical"


def get_danger_recommendations(score: float, factors: RiskFactors) -> list[str]:
    """Suggested follow-up actions, most urgent first."""
    recs: list[str] = []

    if score >= 4:
        recs.append("Urgent: escalate to the project manager now.")
    if factors.motivation_score <= 2:
        recs.append("Support motivation: hold a one-on-one and review task difficulty and type.")
    if factors.load_score >= 4:
        recs.append("Redistribute tasks: postpone low-priority work or hand tasks to teammates.")
    if factors.overdue_tasks > 0:
        recs.append(
            f"{factors.overdue_tasks} overdue task(s): revisit priorities and reset deadlines."
        )
    if factors.recent_activity < 0.5:
        recs.append("Activity has dropped: check in on status and look for blockers.")
    if factors.skill_gap > 0.5:
        recs.append("Skill support needed: arrange mentoring and learning resources.")
    if factors.communication_gap > 0.5:
        recs.append("Communication has dropped: schedule regular check-ins and team meetings.")

    return recs


# ---------------------------------------------------------------------------
# Batch helpers
# ---------------------------------------------------------------------------
def risk_factors_for_student(
    student: Student,
    tasks: Sequence[Task],
    as_of: datetime | date,
) -> RiskFactors:
    """Risk factors from the student's stored scores and overdue tasks."""
    overdue = sum(1 for t in tasks if t.is_assigned_to(student.student_id) and t.is_overdue(as_of))
    return RiskFactors(
        motivation_score=student.motivation_score,
        load_score=student.load_score,
        overdue_tasks=overdue,
    )


def rank_by_danger(
    students: Sequence[Student],
    tasks: Sequence[Task],
    as_of: datetime | date,
) -> list[StudentDanger]:
    """Every student with their danger score, riskiest first."""
    ranking: list[StudentDanger] = []
    for student in students:
        factors = risk_factors_for_student(student, tasks, as_of)
        score = calculate_danger_score(factors)
        ranking.append(StudentDanger(
            student_id=student.student_id,
            name=student.name,
            danger_score=score,
            level=get_danger_level(score),
            factors=factors,
        ))
    return sorted(ranking, key=lambda d: d.danger_score, reverse=True)
