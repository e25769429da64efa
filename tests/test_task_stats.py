"""Tests for teampulse/engine/task_stats.py."""

from datetime import datetime

import pytest

from teampulse.engine.task_stats import (
    completion_rate_score,
    difficulty_adaptation_score,
    efficiency_to_score,
    speed_efficiency_score,
    summarize_task_stats,
    task_efficiency,
)
from teampulse.models import Task


def _task(task_id, category="Execution", status="pending", difficulty=3, assignee="s1", **kwargs):
    return Task(
        task_id=task_id,
        category=category,
        status=status,
        difficulty=difficulty,
        assignee_ids=[assignee],
        **kwargs,
    )


def _timed(task_id, days, estimated_hours, **kwargs):
    start = datetime(2024, 5, 1)
    return _task(
        task_id,
        status="completed",
        start_date=start,
        end_date=datetime(2024, 5, 1 + days),
        estimated_hours=estimated_hours,
        **kwargs,
    )


class TestCompletionRate:
    def test_no_tasks_neutral(self):
        assert completion_rate_score("s1", "Execution", []) == 3.0

    def test_seven_of_ten(self):
        tasks = [_task(f"t{i}", status="completed" if i < 7 else "pending") for i in range(10)]
        # 1 + 4 * 0.7
        assert completion_rate_score("s1", "Execution", tasks) == 3.8

    def test_all_done(self):
        tasks = [_task("a", status="completed"), _task("b", status="completed")]
        assert completion_rate_score("s1", "Execution", tasks) == 5.0

    def test_none_done(self):
        assert completion_rate_score("s1", "Execution", [_task("a")]) == 1.0

    def test_filters_other_people_and_categories(self):
        tasks = [
            _task("a", status="completed"),
            _task("b", assignee="s2"),
            _task("c", category="Planning"),
        ]
        assert completion_rate_score("s1", "Execution", tasks) == 5.0


class TestDifficultyAdaptation:
    def test_nothing_completed_neutral(self):
        assert difficulty_adaptation_score("s1", "Execution", [_task("a", difficulty=5)]) == 3.0

    def test_mean_of_completed(self):
        tasks = [
            _task("a", status="completed", difficulty=4),
            _task("b", status="completed", difficulty=5),
            _task("c", difficulty=1),
        ]
        assert difficulty_adaptation_score("s1", "Execution", tasks) == 4.5


class TestSpeed:
    def test_no_timed_tasks_neutral(self):
        tasks = [_task("a", status="completed")]
        assert speed_efficiency_score("s1", "Execution", tasks) == 3.0

    def test_on_schedule(self):
        # 1 day = 8 working hours, estimate 8h → efficiency 1.0
        assert speed_efficiency_score("s1", "Execution", [_timed("a", 1, 8)]) == 3.0

    def test_fast(self):
        # estimate 16h, took 8h → 2.0 → 3 + 0.8 * 5 = 7 → clamped
        assert speed_efficiency_score("s1", "Execution", [_timed("a", 1, 16)]) == 5.0

    def test_slow(self):
        # estimate 8h, took 16h → 0.5 → 3 - 0.5 * 10 = -2 → clamped
        assert speed_efficiency_score("s1", "Execution", [_timed("a", 2, 8)]) == 1.0

    def test_missing_estimate_counts_on_schedule(self):
        assert speed_efficiency_score("s1", "Execution", [_timed("a", 3, None)]) == 3.0

    def test_efficiency_requires_dates(self):
        with pytest.raises(ValueError, match="no start/end date"):
            task_efficiency(_task("a"))


class TestEfficiencyToScore:
    @pytest.mark.parametrize(("efficiency", "expected"), [
        (1.0, 3.0),
        (1.1, 3.5),
        (1.4, 4.0),
        (0.9, 2.0),
        (0.0, 1.0),
    ])
    def test_mapping(self, efficiency, expected):
        assert efficiency_to_score(efficiency) == expected


class TestSummarize:
    def test_counts_and_flags(self):
        tasks = [_timed("a", 1, 8), _task("b", status="completed"), _task("c")]
        stats = summarize_task_stats("s1", "Execution", tasks)
        assert stats.total_count == 3
        assert stats.completed_count == 2
        assert stats.has_speed_data is True

    def test_empty(self):
        stats = summarize_task_stats("s1", "Execution", [])
        assert stats.total_count == 0
        assert stats.completion_rate == 3.0
        assert stats.difficulty_adaptation == 3.0
        assert stats.speed == 3.0
        assert stats.has_speed_data is False
