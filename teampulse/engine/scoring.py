"""Shared numeric helpers: half-up rounding, clamping, weighted averages.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import math


SCORE_MIN = 1.0
SCORE_MAX = 5.0
NEUTRAL_SCORE = 3.0


# ---------------------------------------------------------------------------
# Rounding / clamping
# ---------------------------------------------------------------------------
def round_half_up(value: float, places: int = 1) -> float:
    """Round *value* to *places* decimals, halves away from -inf (2.25 -> 2.3)."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_score(value: float) -> float:
    """Round to one decimal, then clamp into the 1-5 score range."""
    return clamp(round_half_up(value, 1), SCORE_MIN, SCORE_MAX)


def mean(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or ``None`` for an empty iterable."""
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)


# ---------------------------------------------------------------------------
# Weighted blending
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class WeightedComponent:
    """One signal in a blend: its name, value and weight."""

    name: str
    value: float
    weight: float


def total_weight(components: Sequence[WeightedComponent]) -> float:
    return sum(c.weight for c in components)


def fill_remaining_weight(
    components: list[WeightedComponent],
    name: str,
    value: float,
    target: float = 1.0,
) -> list[WeightedComponent]:
    """Append a *name* component carrying whatever weight is left up to *target*.

    Nothing is appended when the components already reach the target.
    """
    remaining = target - total_weight(components)
    if remaining > 1e-9:
        components.append(WeightedComponent(name, value, remaining))
    return components


def weighted_average(components: Sequence[WeightedComponent], fallback: float) -> float:
    """Σ(value·weight) / Σ(weight); *fallback* when the weights sum to zero."""
    weight_sum = total_weight(components)
    if weight_sum <= 0:
        return fallback
    return sum(c.value * c.weight for c in components) / weight_sum
