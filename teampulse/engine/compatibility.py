"""Partner compatibility between students.

Compatibility comes from the preferred / avoided partner lists each student
keeps. All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from teampulse.engine.scoring import clamp
from teampulse.models import Student


PREFERRED_PARTNER_STEP = 0.5
AVOIDED_PARTNER_STEP = 1.0


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TeamCompatibility(BaseModel):
    """How a student relates to the people they currently work with."""

    student_id: str
    preferred_count: int = Field(ge=0)
    avoided_count: int = Field(ge=0)
    score: float = Field(ge=0.0, le=5.0)


# ---------------------------------------------------------------------------
# Pairwise
# ---------------------------------------------------------------------------
def prefers(student: Student, other: Student) -> bool:
    return other.student_id in student.preferred_partners


def avoids(student: Student, other: Student) -> bool:
    return other.student_id in student.avoided_partners


def partner_adjustment(
    current: Student,
    candidate: Student,
    preferred_bonus: float,
    avoided_penalty: float,
) -> float:
    """Bonus when *current* prefers *candidate* and is not avoided by them;
    penalty when *candidate* avoids *current*; otherwise 0.
    """
    is_avoided = avoids(candidate, current)
    if prefers(current, candidate) and not is_avoided:
        return preferred_bonus
    if is_avoided:
        return -avoided_penalty
    return 0.0


# ---------------------------------------------------------------------------
# Team-level
# ---------------------------------------------------------------------------
def team_compatibility(student: Student, partner_ids: Iterable[str]) -> TeamCompatibility:
    """Score 0-5 around a neutral 3: +0.5 per preferred, −1 per avoided partner."""
    partners = [pid for pid in partner_ids if pid != student.student_id]
    preferred = sum(1 for pid in partners if pid in student.preferred_partners)
    avoided = sum(1 for pid in partners if pid in student.avoided_partners)
    score = clamp(3 + preferred * PREFERRED_PARTNER_STEP - avoided * AVOIDED_PARTNER_STEP, 0.0, 5.0)
    return TeamCompatibility(
        student_id=student.student_id,
        preferred_count=preferred,
        avoided_count=avoided,
        score=score,
    )
