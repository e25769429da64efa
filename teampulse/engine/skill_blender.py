"""Skill blender: task signals + trait prior + self-assessment → skill score.

Two weighting branches:

- without a self-assessment: completion 0.3, difficulty 0.3 (or trait prior
  when nothing is completed), speed 0.2 (or trait prior 0.1 without timing
  data), leftover to the trait prior;
- with one: self-assessment 0.3-0.5 scaled by the reported confidence,
  completion 0.2, difficulty 0.2 (or trait prior 0.1), speed 0.1 when timed,
  leftover to the trait prior.

Both branches build an explicit component list whose weights sum to 1.0 and
reduce it with :func:`weighted_average`. All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from teampulse.engine.scoring import (
    NEUTRAL_SCORE,
    WeightedComponent,
    clamp,
    clamp_score,
    fill_remaining_weight,
    weighted_average,
)
from teampulse.engine.task_stats import TaskStats, summarize_task_stats
from teampulse.engine.trait_prior import calculate_trait_prior
from teampulse.models import SKILL_CATEGORIES, SelfAssessment, Student, Task


FULL_CONFIDENCE_TASKS = 10
SELF_CONFIDENCE_FLOOR = 0.5
SELF_SCALE_MAX = 5.0


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class SkillBreakdown(BaseModel):
    """The sub-scores that went into one category's blend."""

    completion_rate: float
    difficulty_adaptation: float
    speed: float
    trait_prior: float
    self_assessment: float | None = None


class SkillEstimate(BaseModel):
    """Score, confidence and breakdown for a single category."""

    score: float = Field(ge=1.0, le=5.0)
    confidence: float = Field(ge=0.0, le=1.0)
    breakdown: SkillBreakdown


class SkillEvaluationResult(BaseModel):
    """Per-category scores, confidences and breakdowns for one student."""

    scores: dict[str, float]
    confidence: dict[str, float]
    breakdown: dict[str, SkillBreakdown]

    def estimate_for(self, category: str) -> SkillEstimate:
        return SkillEstimate(
            score=self.scores[category],
            confidence=self.confidence[category],
            breakdown=self.breakdown[category],
        )


# ---------------------------------------------------------------------------
# Weight construction
# ---------------------------------------------------------------------------
def task_confidence(stats: TaskStats) -> float:
    """More completed tasks → more confidence, saturating at ten."""
    return min(1.0, stats.completed_count / FULL_CONFIDENCE_TASKS)


def build_components(
    stats: TaskStats,
    prior: float,
    self_assessment: SelfAssessment | None = None,
) -> list[WeightedComponent]:
    """Return the weighted signals for one category; weights sum to 1.0."""
    components: list[WeightedComponent] = []

    if self_assessment is not None:
        self_score = self_assessment.score or NEUTRAL_SCORE
        self_conf = self_assessment.confidence or NEUTRAL_SCORE
        components.append(WeightedComponent(
            "self_assessment", self_score, 0.3 + (self_conf / SELF_SCALE_MAX) * 0.2,
        ))
        components.append(WeightedComponent("completion_rate", stats.completion_rate, 0.2))
        if stats.completed_count > 0:
            components.append(WeightedComponent("difficulty_adaptation", stats.difficulty_adaptation, 0.2))
        else:
            components.append(WeightedComponent("trait_prior", prior, 0.1))
        if stats.has_speed_data:
            components.append(WeightedComponent("speed", stats.speed, 0.1))
    else:
        components.append(WeightedComponent("completion_rate", stats.completion_rate, 0.3))
        if stats.completed_count > 0:
            components.append(WeightedComponent("difficulty_adaptation", stats.difficulty_adaptation, 0.3))
        else:
            components.append(WeightedComponent("trait_prior", prior, 0.3))
        if stats.has_speed_data:
            components.append(WeightedComponent("speed", stats.speed, 0.2))
        else:
            components.append(WeightedComponent("trait_prior", prior, 0.1))

    return fill_remaining_weight(components, "trait_prior", prior)


def blend_confidence(stats: TaskStats, self_assessment: SelfAssessment | None = None) -> float:
    """Confidence in [0, 1]; self-reported certainty dominates when present."""
    from_tasks = task_confidence(stats)
    if self_assessment is None:
        return from_tasks
    self_conf = self_assessment.confidence or NEUTRAL_SCORE
    blended = max(from_tasks * 0.3 + (self_conf / SELF_SCALE_MAX) * 0.7, SELF_CONFIDENCE_FLOOR)
    return clamp(blended, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def _find_self_assessment(
    category: str,
    self_assessments: Sequence[SelfAssessment] | None,
) -> SelfAssessment | None:
    if not self_assessments:
        return None
    return next((a for a in self_assessments if a.skill == category), None)


def blend_skill(
    student_id: str,
    category: str,
    tasks: Sequence[Task],
    prior: float,
    self_assessment: SelfAssessment | None = None,
) -> SkillEstimate:
    """Blend every signal for one (student, category) into a :class:`SkillEstimate`."""
    stats = summarize_task_stats(student_id, category, tasks)
    components = build_components(stats, prior, self_assessment)
    score = clamp_score(weighted_average(components, fallback=prior))
    return SkillEstimate(
        score=score,
        confidence=blend_confidence(stats, self_assessment),
        breakdown=SkillBreakdown(
            completion_rate=stats.completion_rate,
            difficulty_adaptation=stats.difficulty_adaptation,
            speed=stats.speed,
            trait_prior=prior,
            self_assessment=(
                (self_assessment.score or NEUTRAL_SCORE) if self_assessment is not None else None
            ),
        ),
    )


def calculate_skills(
    student: Student,
    tasks: Sequence[Task],
    self_assessments: Sequence[SelfAssessment] | None = None,
) -> SkillEvaluationResult:
    """Evaluate all twelve skill categories for *student*."""
    prior = calculate_trait_prior(student.mbti)
    scores: dict[str, float] = {}
    confidence: dict[str, float] = {}
    breakdown: dict[str, SkillBreakdown] = {}

    for category in SKILL_CATEGORIES:
        estimate = blend_skill(
            student.student_id,
            category,
            tasks,
            prior[category],
            _find_self_assessment(category, self_assessments),
        )
        scores[category] = estimate.score
        confidence[category] = estimate.confidence
        breakdown[category] = estimate.breakdown

    return SkillEvaluationResult(scores=scores, confidence=confidence, breakdown=breakdown)


def calculate_skill_for_category(
    student: Student,
    category: str,
    tasks: Sequence[Task],
    self_assessments: Sequence[SelfAssessment] | None = None,
) -> SkillEstimate:
    """Evaluate a single category; unknown categories use a neutral prior."""
    prior = calculate_trait_prior(student.mbti).get(category, NEUTRAL_SCORE)
    return blend_skill(
        student.student_id,
        category,
        tasks,
        prior,
        _find_self_assessment(category, self_assessments),
    )
