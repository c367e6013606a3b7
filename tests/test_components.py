"""Tests for the small expansion building blocks: duplicate index, rotation, pay, tasks."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.domain.scheduling.existing_index import ExistingInstanceIndex
from app.domain.scheduling.horizon import GenerationWindow
from app.domain.scheduling.pay import estimate, resolve_pay
from app.domain.scheduling.rotation import AssignmentRotator
from app.domain.scheduling.tasks import SeededTask, seed_tasks


class TestExistingInstanceIndex:
    def test_time_of_day_is_ignored(self):
        index = ExistingInstanceIndex([datetime(2024, 1, 15, 14, 30)])
        assert index.has_instance_on(date(2024, 1, 15))
        assert index.has_instance_on(datetime(2024, 1, 15, 6, 0))
        assert not index.has_instance_on(date(2024, 1, 16))

    def test_restricted_to_window(self):
        window = GenerationWindow(start=date(2024, 1, 15), end=date(2024, 1, 21))
        index = ExistingInstanceIndex(
            [datetime(2024, 1, 14, 9, 0), datetime(2024, 1, 16, 9, 0), datetime(2024, 1, 22, 9, 0)],
            window=window,
        )
        assert len(index) == 1
        assert date(2024, 1, 16) in index
        assert date(2024, 1, 22) not in index

    def test_missing_schedule_ignored(self):
        index = ExistingInstanceIndex([None, date(2024, 1, 15)])
        assert len(index) == 1

    def test_empty(self):
        assert not ExistingInstanceIndex.empty().has_instance_on(date(2024, 1, 15))


class TestAssignmentRotator:
    def test_round_robin(self):
        rotator = AssignmentRotator([1, 2, 3])
        assert [rotator.next() for _ in range(7)] == [1, 2, 3, 1, 2, 3, 1]

    def test_empty_pool_returns_none(self):
        rotator = AssignmentRotator([])
        assert rotator.next() is None
        assert rotator.next() is None

    def test_pool_deduplicated_in_order(self):
        rotator = AssignmentRotator([2, 1, 2, None, 3, 1])
        assert rotator.pool == (2, 1, 3)

    @pytest.mark.parametrize("calls,pool_size", [(10, 3), (7, 2), (4, 4), (13, 5)])
    def test_balanced_load(self, calls, pool_size):
        rotator = AssignmentRotator(range(pool_size))
        counts = {}
        for _ in range(calls):
            staff_id = rotator.next()
            counts[staff_id] = counts.get(staff_id, 0) + 1
        assert set(counts.values()) <= {calls // pool_size, -(-calls // pool_size)}


class TestPay:
    def test_hourly_rate_times_hours(self):
        assert estimate(Decimal("15.00"), 120) == Decimal("30.00")

    def test_partial_hours(self):
        assert estimate(Decimal("12.50"), 90) == Decimal("18.75")

    def test_no_rate_means_no_pay(self):
        assert estimate(None, 120) is None

    def test_rounds_half_up(self):
        # 0.05 * 0.5h = 0.025 -> 0.03 (banker's rounding would give 0.02)
        assert estimate(Decimal("0.05"), 30) == Decimal("0.03")

    def test_float_and_string_rates(self):
        assert estimate(15.1, 60) == Decimal("15.10")
        assert estimate("20", 45) == Decimal("15.00")

    def test_override_wins(self):
        assert resolve_pay(Decimal("42.5"), Decimal("15.00"), 120) == Decimal("42.50")

    def test_override_is_not_rounded(self):
        pay = resolve_pay("12.345", Decimal("15.00"), 120)
        assert pay == Decimal("12.345")
        assert str(pay) == "12.345"

    def test_zero_override_is_kept(self):
        assert resolve_pay(0, Decimal("15.00"), 120) == Decimal("0.00")

    def test_estimate_fills_missing_override(self):
        assert resolve_pay(None, Decimal("15.00"), 60) == Decimal("15.00")


class TestSeedTasks:
    def test_trims_and_drops_blanks_keeping_order(self):
        tasks = seed_tasks(["  Kitchen ", "", "   ", "Bathrooms", None, 7, "Windows"])
        assert tasks == [
            SeededTask(title="Kitchen", position=0),
            SeededTask(title="Bathrooms", position=1),
            SeededTask(title="Windows", position=2),
        ]

    @pytest.mark.parametrize("raw", [None, [], "Kitchen", {"title": "Kitchen"}])
    def test_no_usable_list(self, raw):
        assert seed_tasks(raw) == []

    def test_long_titles_truncated_to_column_size(self):
        (task,) = seed_tasks(["x" * 300])
        assert len(task.title) == 255
