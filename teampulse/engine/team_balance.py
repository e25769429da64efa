"""Team load balance: how evenly work and motivation spread across a team.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, Field

from teampulse.engine.scoring import round_half_up
from teampulse.models import Student, Team


# variance floor -> balance score, checked top-down
_BALANCE_TIERS: tuple[tuple[float, int], ...] = (
    (2.0, 1),
    (1.0, 2),
    (0.5, 3),
)
BALANCED_SCORE = 5


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class MemberLoad(BaseModel):
    student_id: str
    name: str
    load_score: float
    motivation_score: float


class TeamLoadBalance(BaseModel):
    """Load and motivation statistics for one team."""

    team_id: str
    team_name: str
    project_name: str
    member_count: int = Field(ge=0)
    avg_motivation: float
    avg_load: float
    max_load: float
    min_load: float
    load_variance: float = Field(ge=0.0)
    balance_score: int = Field(ge=1, le=5)
    members: list[MemberLoad] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def balance_score(variance: float) -> int:
    """Map load variance to 1 (very uneven) .. 5 (even)."""
    for floor, score in _BALANCE_TIERS:
        if variance > floor:
            return score
    return BALANCED_SCORE


def calculate_team_load_balance(team: Team, students: Sequence[Student]) -> TeamLoadBalance:
    """Summarise how evenly load is spread across *team*.

    Members are the students listed in ``team.student_ids`` or carrying the
    team's id. An empty team reports zeros and a perfect balance score.
    """
    member_ids = set(team.student_ids)
    members = [s for s in students if s.student_id in member_ids or s.team_id == team.team_id]

    summaries = [
        MemberLoad(
            student_id=s.student_id,
            name=s.name,
            load_score=s.load_score,
            motivation_score=s.motivation_score,
        )
        for s in members
    ]

    if not members:
        return TeamLoadBalance(
            team_id=team.team_id,
            team_name=team.name,
            project_name=team.project_name,
            member_count=0,
            avg_motivation=0.0,
            avg_load=0.0,
            max_load=0.0,
            min_load=0.0,
            load_variance=0.0,
            balance_score=BALANCED_SCORE,
        )

    loads = np.array([s.load_score for s in members], dtype=float)
    motivations = np.array([s.motivation_score for s in members], dtype=float)
    variance = round_half_up(float(np.var(loads)), 2)

    return TeamLoadBalance(
        team_id=team.team_id,
        team_name=team.name,
        project_name=team.project_name,
        member_count=len(members),
        avg_motivation=round_half_up(float(np.mean(motivations)), 1),
        avg_load=round_half_up(float(np.mean(loads)), 1),
        max_load=float(np.max(loads)),
        min_load=float(np.min(loads)),
        load_variance=variance,
        balance_score=balance_score(variance),
        members=summaries,
    )
