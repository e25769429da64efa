"""Tests for teampulse/engine/scoring.py."""

import pytest

from teampulse.engine.scoring import (
    WeightedComponent,
    clamp_score,
    fill_remaining_weight,
    mean,
    round_half_up,
    total_weight,
    weighted_average,
)


class TestRounding:
    @pytest.mark.parametrize(("value", "expected"), [
        (2.25, 2.3),
        (2.24, 2.2),
        (3.0, 3.0),
        (-1.25, -1.2),
    ])
    def test_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_integer_places(self):
        assert round_half_up(90.5, 0) == 91.0

    def test_clamp_score(self):
        assert clamp_score(7.2) == 5.0
        assert clamp_score(0.2) == 1.0
        assert clamp_score(3.46) == 3.5


class TestMean:
    def test_empty(self):
        assert mean([]) is None

    def test_values(self):
        assert mean([1, 2, 3, 4]) == 2.5


class TestWeightedAverage:
    def test_average(self):
        components = [WeightedComponent("a", 4.0, 0.5), WeightedComponent("b", 2.0, 0.5)]
        assert weighted_average(components, fallback=0.0) == 3.0

    def test_zero_weight_fallback(self):
        assert weighted_average([], fallback=3.0) == 3.0

    def test_fill_remaining(self):
        components = [WeightedComponent("a", 4.0, 0.3)]
        fill_remaining_weight(components, "rest", 2.0)
        assert components[-1].name == "rest"
        assert components[-1].weight == pytest.approx(0.7)
        assert total_weight(components) == pytest.approx(1.0)

    def test_fill_nothing_when_full(self):
        components = [WeightedComponent("a", 4.0, 1.0)]
        assert len(fill_remaining_weight(components, "rest", 2.0)) == 1
