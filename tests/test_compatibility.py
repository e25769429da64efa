"""Tests for teampulse/engine/compatibility.py."""

from teampulse.engine.compatibility import (
    avoids,
    partner_adjustment,
    prefers,
    team_compatibility,
)
from teampulse.models import Student


def _student(student_id, preferred=(), avoided=()):
    return Student(
        student_id=student_id,
        preferred_partners=list(preferred),
        avoided_partners=list(avoided),
    )


class TestPairwise:
    def test_prefers_and_avoids(self):
        a = _student("a", preferred=["b"], avoided=["c"])
        assert prefers(a, _student("b"))
        assert avoids(a, _student("c"))
        assert not prefers(a, _student("c"))

    def test_preferred_bonus(self):
        current = _student("a", preferred=["b"])
        assert partner_adjustment(current, _student("b"), 10, 5) == 10

    def test_avoided_penalty(self):
        """The candidate avoiding the current holder costs points."""
        current = _student("a")
        candidate = _student("b", avoided=["a"])
        assert partner_adjustment(current, candidate, 10, 5) == -5

    def test_mutual_preference_blocked_by_avoidance(self):
        current = _student("a", preferred=["b"])
        candidate = _student("b", avoided=["a"])
        assert partner_adjustment(current, candidate, 10, 5) == -5

    def test_neutral(self):
        assert partner_adjustment(_student("a"), _student("b"), 10, 5) == 0.0

    def test_one_sided_avoidance_by_current_is_neutral(self):
        current = _student("a", avoided=["b"])
        assert partner_adjustment(current, _student("b"), 10, 5) == 0.0


class TestTeamCompatibility:
    def test_neutral_team(self):
        result = team_compatibility(_student("a"), ["b", "c"])
        assert result.score == 3.0
        assert result.preferred_count == 0

    def test_preferred_partners(self):
        result = team_compatibility(_student("a", preferred=["b", "c"]), ["b", "c", "d"])
        # 3 + 2 * 0.5
        assert result.score == 4.0
        assert result.preferred_count == 2

    def test_avoided_partners(self):
        result = team_compatibility(_student("a", avoided=["b"]), ["b"])
        assert result.score == 2.0
        assert result.avoided_count == 1

    def test_clamped(self):
        result = team_compatibility(_student("a", avoided=list("bcdef")), list("bcdef"))
        assert result.score == 0.0

    def test_self_ignored(self):
        result = team_compatibility(_student("a", preferred=["a"]), ["a"])
        assert result.preferred_count == 0
