"""Workload ("load") scoring on the 1-5 scale.

Two strategies share one contract, ``(tasks, as_of) -> float``:

- ``tiered``   additive tiers over active-task count, estimated hours,
               mean difficulty and overdue count
- ``weighted`` difficulty × time weight × deadline urgency per task, scaled by
               a task-count multiplier and normalised against a fixed ceiling

They are used in different contexts and do not agree numerically, so they stay
separate. ``as_of`` is always passed in; nothing here reads the clock.
All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from types import MappingProxyType
from typing import Literal, Protocol

from pydantic import BaseModel, Field

from teampulse.engine.scoring import SCORE_MIN, clamp_score, mean
from teampulse.models import Task, normalize_timestamp


_SECONDS_PER_DAY = 24 * 60 * 60

LoadLevel = Literal["low", "medium", "high", "critical"]


class LoadStrategy(Protocol):
    def __call__(self, tasks: Sequence[Task], as_of: datetime | date) -> float: ...


# ---------------------------------------------------------------------------
# Tier tables: (threshold, bonus), checked top-down, first match wins
# ---------------------------------------------------------------------------
_COUNT_TIERS: tuple[tuple[float, float], ...] = ((10, 2.5), (7, 2.0), (5, 1.5), (3, 1.0), (1, 0.5))
_HOURS_TIERS: tuple[tuple[float, float], ...] = ((40, 1.0), (30, 0.8), (20, 0.5), (10, 0.3))
_DIFFICULTY_TIERS: tuple[tuple[float, float], ...] = ((4.5, 0.5), (4.0, 0.3), (3.5, 0.2))
_OVERDUE_TIERS: tuple[tuple[float, float], ...] = ((3, 1.0), (2, 0.7), (1, 0.4))

# (days-until-deadline upper bound, multiplier); overdue handled separately
_URGENCY_TIERS: tuple[tuple[float, float], ...] = ((1, 1.8), (3, 1.5), (7, 1.2))
OVERDUE_MULTIPLIER = 2.0

TIME_WEIGHT_HOURS = 10.0
TASK_COUNT_BASELINE = 3
TASK_COUNT_MULTIPLIER_CAP = 1.5
# difficulty 5 × time weight 1 × urgency 2.0 × count multiplier 1.5
WEIGHTED_LOAD_CEILING = 15.0


def _tier_bonus(value: float, tiers: Sequence[tuple[float, float]]) -> float:
    for threshold, bonus in tiers:
        if value >= threshold:
            return bonus
    return 0.0


def active_tasks(tasks: Sequence[Task]) -> list[Task]:
    return [t for t in tasks if t.is_active]


def days_until_deadline(task: Task, as_of: datetime | date) -> float | None:
    """Fractional days from *as_of* to the deadline (negative once overdue)."""
    if task.deadline is None:
        return None
    return (task.deadline - normalize_timestamp(as_of)).total_seconds() / _SECONDS_PER_DAY


def urgency_multiplier(task: Task, as_of: datetime | date) -> float:
    days = days_until_deadline(task, as_of)
    if days is None:
        return 1.0
    if days < 0:
        return OVERDUE_MULTIPLIER
    for bound, multiplier in _URGENCY_TIERS:
        if days < bound:
            return multiplier
    return 1.0


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------
def calculate_tiered_load(tasks: Sequence[Task], as_of: datetime | date) -> float:
    """Load from count / hours / difficulty / overdue tiers, starting at 1.0."""
    active = active_tasks(tasks)
    if not active:
        return SCORE_MIN

    total_hours = sum(t.estimated_hours or 0.0 for t in active)
    avg_difficulty = mean(t.difficulty for t in active) or 0.0
    overdue = sum(1 for t in active if t.is_overdue(as_of))

    score = SCORE_MIN
    score += _tier_bonus(len(active), _COUNT_TIERS)
    score += _tier_bonus(total_hours, _HOURS_TIERS)
    score += _tier_bonus(avg_difficulty, _DIFFICULTY_TIERS)
    score += _tier_bonus(overdue, _OVERDUE_TIERS)
    return clamp_score(score)


def weighted_task_load(task: Task, as_of: datetime | date) -> float:
    """``difficulty × min(hours / 10, 1) × urgency`` for one task.

    A task without an estimate counts with the full time weight.
    """
    if task.estimated_hours is None:
        time_weight = 1.0
    else:
        time_weight = min(task.estimated_hours / TIME_WEIGHT_HOURS, 1.0)
    return task.difficulty * time_weight * urgency_multiplier(task, as_of)


def calculate_weighted_load(tasks: Sequence[Task], as_of: datetime | date) -> float:
    """Load from per-task weighted effort, normalised against the ceiling."""
    active = active_tasks(tasks)
    if not active:
        return SCORE_MIN

    total = sum(weighted_task_load(t, as_of) for t in active)
    count_multiplier = min(len(active) / TASK_COUNT_BASELINE, TASK_COUNT_MULTIPLIER_CAP)
    normalized = (total * count_multiplier / WEIGHTED_LOAD_CEILING) * 4 + 1
    return clamp_score(normalized)


LOAD_STRATEGIES: Mapping[str, LoadStrategy] = MappingProxyType({
    "tiered": calculate_tiered_load,
    "weighted": calculate_weighted_load,
})


def get_load_strategy(name: str) -> LoadStrategy:
    """Look up a strategy by name.

    Raises:
        ValueError: If *name* is not a registered strategy.
    """
    try:
        return LOAD_STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(LOAD_STRATEGIES))
        raise ValueError(f"Unknown load strategy '{name}' (expected one of: {known})") from None


def calculate_load(
    tasks: Sequence[Task],
    as_of: datetime | date,
    strategy: str | LoadStrategy = "tiered",
) -> float:
    """Score *tasks* with the named (or given) strategy."""
    fn = get_load_strategy(strategy) if isinstance(strategy, str) else strategy
    return fn(tasks, as_of)


# ---------------------------------------------------------------------------
# Levels / per-category view
# ---------------------------------------------------------------------------
def get_load_level(load: float) -> LoadLevel:
    if load < 2:
        return "low"
    if load < 3:
        return "medium"
    if load < 4:
        return "high"
    return "critical"


class CategoryLoad(BaseModel):
    """Mean active difficulty within one task category."""

    category: str
    task_count: int = Field(ge=1)
    load: float = Field(ge=1.0, le=5.0)


def calculate_load_by_category(tasks: Sequence[Task]) -> dict[str, CategoryLoad]:
    """Group active tasks by category and score each by mean difficulty."""
    grouped: dict[str, list[int]] = {}
    for task in active_tasks(tasks):
        grouped.setdefault(task.category, []).append(task.difficulty)
    return {
        category: CategoryLoad(
            category=category,
            task_count=len(difficulties),
            load=clamp_score(sum(difficulties) / len(difficulties)),
        )
        for category, difficulties in grouped.items()
    }
