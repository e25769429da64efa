"""Tests for teampulse/engine/load.py: both load strategies and helpers."""

from datetime import date, datetime, timedelta

import pytest

from teampulse.engine.load import (
    LOAD_STRATEGIES,
    calculate_load,
    calculate_load_by_category,
    calculate_tiered_load,
    calculate_weighted_load,
    days_until_deadline,
    get_load_level,
    get_load_strategy,
    urgency_multiplier,
    weighted_task_load,
)
from teampulse.models import Task

AS_OF = datetime(2024, 6, 1, 12, 0)


def _task(task_id, status="pending", difficulty=3, hours=None, due_in_days=None, category="Execution"):
    deadline = AS_OF + timedelta(days=due_in_days) if due_in_days is not None else None
    return Task(
        task_id=task_id,
        category=category,
        status=status,
        difficulty=difficulty,
        estimated_hours=hours,
        deadline=deadline,
        assignee_ids=["s1"],
    )


class TestTieredLoad:
    def test_no_active_tasks(self):
        assert calculate_tiered_load([], AS_OF) == 1.0
        assert calculate_tiered_load([_task("a", status="completed")], AS_OF) == 1.0

    def test_single_easy_task(self):
        # 1 + 0.5 (count)
        assert calculate_tiered_load([_task("a")], AS_OF) == 1.5

    def test_all_tiers(self):
        tasks = [_task(f"t{i}", difficulty=5, hours=5, due_in_days=-1) for i in range(10)]
        # 1 + 2.5 + 1.0 (50h) + 0.5 + 1.0 → clamped
        assert calculate_tiered_load(tasks, AS_OF) == 5.0

    def test_mid_tiers(self):
        tasks = [
            _task("a", difficulty=4, hours=10, due_in_days=-2),
            _task("b", difficulty=4, hours=10, due_in_days=5),
            _task("c", difficulty=4, hours=5),
        ]
        # 1 + 1.0 (3 tasks) + 0.5 (25h) + 0.3 (avg 4) + 0.4 (1 overdue)
        assert calculate_tiered_load(tasks, AS_OF) == 3.2

    def test_completed_tasks_ignored(self):
        tasks = [_task("a"), _task("b", status="completed", difficulty=5, hours=40, due_in_days=-3)]
        assert calculate_tiered_load(tasks, AS_OF) == 1.5


class TestUrgency:
    def test_days_until_deadline(self):
        assert days_until_deadline(_task("a", due_in_days=2), AS_OF) == pytest.approx(2.0)
        assert days_until_deadline(_task("a"), AS_OF) is None

    @pytest.mark.parametrize(("due_in_days", "expected"), [
        (None, 1.0),
        (-0.5, 2.0),
        (0.5, 1.8),
        (2, 1.5),
        (5, 1.2),
        (10, 1.0),
    ])
    def test_multiplier(self, due_in_days, expected):
        assert urgency_multiplier(_task("a", due_in_days=due_in_days), AS_OF) == expected

    def test_accepts_plain_date(self):
        t = _task("a", due_in_days=3)
        assert days_until_deadline(t, date(2024, 6, 1)) == pytest.approx(3.5)


class TestWeightedLoad:
    def test_no_active_tasks(self):
        assert calculate_weighted_load([], AS_OF) == 1.0

    def test_task_without_hours_takes_full_time_weight(self):
        assert weighted_task_load(_task("a", difficulty=5), AS_OF) == 5.0
        assert weighted_task_load(_task("a", difficulty=5, due_in_days=-1), AS_OF) == 10.0

    def test_zero_hours_still_weighs_nothing(self):
        assert weighted_task_load(_task("a", difficulty=5, hours=0), AS_OF) == 0.0

    def test_overdue_hard_tasks_without_hours_saturate(self):
        tasks = [_task(f"t{i}", status="in_progress", difficulty=5, due_in_days=-30) for i in range(10)]
        assert calculate_weighted_load(tasks, AS_OF) == 5.0

    def test_difficulty_and_urgency_drive_score_without_hours(self):
        easy = [_task(f"t{i}", difficulty=2) for i in range(3)]
        hard = [_task(f"t{i}", difficulty=4) for i in range(3)]
        overdue = [_task(f"t{i}", difficulty=2, due_in_days=-1) for i in range(3)]
        # 6/15*4 + 1
        assert calculate_weighted_load(easy, AS_OF) == 2.6
        # 12/15*4 + 1
        assert calculate_weighted_load(hard, AS_OF) == 4.2
        assert calculate_weighted_load(overdue, AS_OF) == 4.2

    def test_time_weight_capped(self):
        assert weighted_task_load(_task("a", difficulty=4, hours=30), AS_OF) == 4.0

    def test_three_tasks(self):
        tasks = [_task(f"t{i}", difficulty=3, hours=10, due_in_days=10) for i in range(3)]
        # total 9, count multiplier 1 → 9/15*4 + 1 = 3.4
        assert calculate_weighted_load(tasks, AS_OF) == 3.4

    def test_saturates(self):
        tasks = [_task(f"t{i}", difficulty=5, hours=10, due_in_days=-1) for i in range(6)]
        assert calculate_weighted_load(tasks, AS_OF) == 5.0


class TestStrategies:
    def test_registry(self):
        assert set(LOAD_STRATEGIES) == {"tiered", "weighted"}
        assert get_load_strategy("tiered") is calculate_tiered_load

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown load strategy"):
            get_load_strategy("magic")

    def test_calculate_load_by_name(self):
        tasks = [_task("a", difficulty=3, hours=10)]
        assert calculate_load(tasks, AS_OF) == calculate_tiered_load(tasks, AS_OF)
        assert calculate_load(tasks, AS_OF, "weighted") == calculate_weighted_load(tasks, AS_OF)

    def test_calculate_load_with_callable(self):
        assert calculate_load([], AS_OF, lambda tasks, as_of: 2.5) == 2.5

    @pytest.mark.parametrize("name", ["tiered", "weighted"])
    def test_range(self, name):
        tasks = [_task(f"t{i}", difficulty=(i % 5) + 1, hours=i * 3, due_in_days=i - 4) for i in range(12)]
        assert 1.0 <= calculate_load(tasks, AS_OF, name) <= 5.0


class TestLoadLevel:
    @pytest.mark.parametrize(("score", "level"), [
        (1.0, "low"),
        (1.9, "low"),
        (2.0, "medium"),
        (3.5, "high"),
        (4.0, "critical"),
    ])
    def test_levels(self, score, level):
        assert get_load_level(score) == level


class TestLoadByCategory:
    def test_groups_active_tasks(self):
        tasks = [
            _task("a", difficulty=4, category="Planning"),
            _task("b", difficulty=5, category="Planning"),
            _task("c", difficulty=2, category="Design"),
            _task("d", difficulty=5, category="Design", status="completed"),
        ]
        result = calculate_load_by_category(tasks)
        assert result["Planning"].load == 4.5
        assert result["Planning"].task_count == 2
        assert result["Design"].load == 2.0
        assert result["Design"].task_count == 1
