"""Trait prior: baseline skill scores from a four-letter personality code.

Each resolved axis letter contributes a fixed set of additive nudges; the
nudges are summed on top of the neutral 3.0 and the result is clamped.
All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from teampulse.engine.scoring import NEUTRAL_SCORE, clamp_score
from teampulse.models import SKILL_CATEGORIES
from teampulse.personality_types import resolve_axis_letters


# ---------------------------------------------------------------------------
# Delta table: (position, letter) → {category: delta}
# ---------------------------------------------------------------------------
TRAIT_DELTAS: Mapping[tuple[int, str], Mapping[str, float]] = MappingProxyType({
    (0, "E"): MappingProxyType({
        "Coordination": 0.2,
        "Exploration": 0.1,
        "Communication": 0.3,
        "Leadership": 0.2,
        "Presentation": 0.2,
    }),
    (0, "I"): MappingProxyType({
        "Planning": 0.2,
        "Execution": 0.1,
        "Analysis": 0.2,
        "Documentation": 0.1,
    }),
    (1, "S"): MappingProxyType({
        "Execution": 0.3,
        "Coordination": 0.2,
        "Development": 0.2,
        "Planning": -0.1,
        "Exploration": -0.1,
    }),
    (1, "N"): MappingProxyType({
        "Planning": 0.3,
        "Exploration": 0.3,
        "Execution": -0.2,
        "Coordination": 0.1,
        "Analysis": 0.2,
    }),
    (2, "T"): MappingProxyType({
        "Execution": 0.1,
        "Planning": 0.1,
        "Development": 0.2,
        "Analysis": 0.2,
        "Problem-Solving": 0.2,
    }),
    (2, "F"): MappingProxyType({
        "Coordination": 0.2,
        "Communication": 0.2,
        "Design": 0.1,
    }),
    (3, "J"): MappingProxyType({
        "Execution": 0.1,
        "Coordination": 0.1,
        "Documentation": 0.2,
        "Problem-Solving": 0.1,
    }),
    (3, "P"): MappingProxyType({
        "Exploration": 0.1,
        "Planning": 0.1,
        "Design": 0.1,
    }),
})


def default_trait_prior() -> dict[str, float]:
    """All categories at the neutral 3.0."""
    return {category: NEUTRAL_SCORE for category in SKILL_CATEGORIES}


def trait_deltas(code: str | None) -> dict[str, float]:
    """Summed per-category nudges for *code* (empty for a missing code)."""
    letters = resolve_axis_letters(code)
    if letters is None:
        return {}
    totals: dict[str, float] = {}
    for position, letter in enumerate(letters):
        for category, delta in TRAIT_DELTAS[(position, letter)].items():
            totals[category] = totals.get(category, 0.0) + delta
    return totals


def calculate_trait_prior(code: str | None) -> dict[str, float]:
    """Return the baseline score for every skill category.

    A missing code, or one shorter than four characters, yields the
    all-3.0 defaults.
    """
    base = default_trait_prior()
    deltas = trait_deltas(code)
    if not deltas:
        return base
    return {
        category: clamp_score(score + deltas.get(category, 0.0))
        for category, score in base.items()
    }


def trait_prior_for(code: str | None, category: str) -> float:
    """Baseline for one category; categories outside the known set get 3.0."""
    return calculate_trait_prior(code).get(category, NEUTRAL_SCORE)
