"""Tests for the generation window calculation."""

from datetime import date, datetime

import pytest

from app.domain.scheduling.errors import ScheduleValidationError
from app.domain.scheduling.horizon import GenerationWindow, compute_window

MONDAY = date(2024, 1, 15)


class TestComputeWindow:
    def test_starts_at_as_of_when_contract_already_running(self):
        window = compute_window(MONDAY, 2, date(2023, 6, 1))
        assert window.start == MONDAY

    def test_starts_at_contract_start_when_in_future(self):
        window = compute_window(date(2024, 1, 1), 1, MONDAY)
        assert window.start == MONDAY

    def test_covers_weeks_ahead_times_seven_days(self):
        window = compute_window(MONDAY, 2, MONDAY)
        assert window.end == date(2024, 1, 28)
        assert window.days == 14

    def test_clipped_to_contract_end_inclusive(self):
        window = compute_window(MONDAY, 4, MONDAY, date(2024, 1, 20))
        assert window == GenerationWindow(start=MONDAY, end=date(2024, 1, 20))

    def test_end_later_than_lookahead_is_ignored(self):
        window = compute_window(MONDAY, 1, MONDAY, date(2025, 1, 1))
        assert window.end == date(2024, 1, 21)

    def test_end_on_start_day_gives_single_day(self):
        window = compute_window(MONDAY, 2, MONDAY, MONDAY)
        assert window.start == window.end == MONDAY

    def test_contract_already_ended_returns_none(self):
        assert compute_window(MONDAY, 4, date(2023, 1, 2), date(2023, 12, 31)) is None

    def test_datetimes_normalised_to_calendar_dates(self):
        window = compute_window(
            datetime(2024, 1, 15, 16, 45),
            1,
            datetime(2024, 1, 10, 8, 0),
            datetime(2024, 1, 18, 23, 59),
        )
        assert window == GenerationWindow(start=MONDAY, end=date(2024, 1, 18))

    @pytest.mark.parametrize("weeks", [0, -1, True, 1.5, None])
    def test_invalid_weeks_ahead(self, weeks):
        with pytest.raises(ScheduleValidationError):
            compute_window(MONDAY, weeks, MONDAY)


class TestGenerationWindow:
    def test_week_anchors(self):
        window = GenerationWindow(start=MONDAY, end=date(2024, 1, 28))
        assert list(window.week_anchors()) == [MONDAY, date(2024, 1, 22)]

    def test_partial_last_week_still_anchored(self):
        window = GenerationWindow(start=MONDAY, end=date(2024, 1, 23))
        assert list(window.week_anchors()) == [MONDAY, date(2024, 1, 22)]

    def test_contains(self):
        window = GenerationWindow(start=MONDAY, end=date(2024, 1, 21))
        assert window.contains(MONDAY)
        assert window.contains(datetime(2024, 1, 21, 23, 0))
        assert not window.contains(date(2024, 1, 22))
        assert not window.contains(date(2024, 1, 14))
