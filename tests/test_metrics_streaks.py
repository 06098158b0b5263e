"""Tests for streak and goal-progress calculation."""

import pytest

from measure_agi.metrics.streaks import compute_streaks, goal_progress, summarize_calendar
from measure_agi.models import CalendarDayRecord, DayStatus, StreakResult
from measure_agi.normalize.calendar import calendar_records


def _days(*statuses: tuple[int, str]) -> list[CalendarDayRecord]:
    return [CalendarDayRecord(day=day, status=DayStatus(status)) for day, status in statuses]


class TestComputeStreaks:
    """Tests for compute_streaks."""

    def test_empty(self) -> None:
        """Test that no records give zero streaks."""
        assert compute_streaks([]) == StreakResult(current=0, longest=0)

    def test_single_agi_day(self) -> None:
        """Test a single AGI day."""
        assert compute_streaks(_days((1, "agi"))) == StreakResult(current=1, longest=1)

    def test_broken_run(self) -> None:
        """Test agi, agi, missed, agi."""
        result = compute_streaks(_days((1, "agi"), (2, "agi"), (3, "missed"), (4, "agi")))
        assert result == StreakResult(current=1, longest=2)

    def test_last_day_not_agi(self) -> None:
        """Test that a non-AGI last record ends the current streak."""
        result = compute_streaks(_days((1, "agi"), (2, "agi"), (3, "evaluating")))
        assert result == StreakResult(current=0, longest=2)

    def test_gaps_do_not_break_runs(self) -> None:
        """Test that missing day numbers are not treated as breaks."""
        result = compute_streaks(_days((1, "agi"), (5, "agi"), (9, "agi")))
        assert result == StreakResult(current=3, longest=3)

    def test_unsorted_input(self) -> None:
        """Test that records are scanned in day order."""
        result = compute_streaks(_days((4, "agi"), (1, "agi"), (3, "missed"), (2, "agi")))
        assert result == StreakResult(current=1, longest=2)

    def test_breaker_with_bad_note_still_breaks(self) -> None:
        """Test that a missed day with a malformed note is kept as a breaker."""
        records = calendar_records(
            [
                {"day": 1, "status": "agi"},
                {"day": 2, "status": "missed", "note": {"reason": "timeout"}, "topPerformer": 0},
                {"day": 3, "status": "agi"},
            ]
        )

        assert compute_streaks(records) == StreakResult(current=1, longest=1)

    def test_hundred_day_goal(self) -> None:
        """Test 100 consecutive AGI days."""
        result = compute_streaks(_days(*[(day, "agi") for day in range(1, 101)]))
        assert result == StreakResult(current=100, longest=100)

    @pytest.mark.parametrize(
        "statuses",
        [
            ["agi", "missed", "agi", "agi", "pending"],
            ["missed", "agi", "agi", "agi"],
            ["agi", "agi", "agi", "missed", "agi"],
            ["pending", "evaluating"],
        ],
    )
    def test_longest_at_least_current(self, statuses: list[str]) -> None:
        """Test that the longest streak is never shorter than the current one."""
        result = compute_streaks(_days(*enumerate(statuses, start=1)))
        assert result.longest >= result.current


class TestGoalProgress:
    """Tests for goal_progress."""

    def test_zero(self) -> None:
        """Test progress with no streaks."""
        progress = goal_progress(StreakResult())

        assert progress.fraction == 0
        assert progress.achieved is False
        assert progress.remaining == 100

    def test_partial(self) -> None:
        """Test progress driven by the longest streak."""
        progress = goal_progress(StreakResult(current=3, longest=40))

        assert progress.fraction == pytest.approx(0.4)
        assert progress.achieved is False
        assert progress.longest_reached_goal is False
        assert progress.best == 40
        assert progress.remaining == 60

    def test_achieved_uses_current(self) -> None:
        """Test that achievement follows the current streak."""
        progress = goal_progress(StreakResult(current=100, longest=100))

        assert progress.achieved is True
        assert progress.fraction == 1
        assert progress.remaining == 0

    def test_broken_after_goal(self) -> None:
        """Test a goal reached earlier but not currently sustained."""
        progress = goal_progress(StreakResult(current=0, longest=120))

        assert progress.achieved is False
        assert progress.longest_reached_goal is True
        assert progress.fraction == 1
        assert progress.remaining == 0

    def test_custom_goal(self) -> None:
        """Test a configurable goal length."""
        progress = goal_progress(StreakResult(current=5, longest=5), goal_days=10)

        assert progress.fraction == pytest.approx(0.5)
        assert progress.remaining == 5

    def test_invalid_goal(self) -> None:
        """Test that non-positive goals are contract violations."""
        with pytest.raises(ValueError, match="goal_days must be positive"):
            goal_progress(StreakResult(), goal_days=0)


class TestSummarizeCalendar:
    """Tests for summarize_calendar."""

    def test_counts(self) -> None:
        """Test days tracked and AGI day counts."""
        summary = summarize_calendar(
            _days((1, "agi"), (2, "agi"), (3, "missed"), (4, "evaluating"))
        )

        assert summary.days_tracked == 4
        assert summary.agi_days == 2
        assert summary.streaks == StreakResult(current=0, longest=2)

    def test_empty(self) -> None:
        """Test the empty summary."""
        summary = summarize_calendar([])

        assert summary.days_tracked == 0
        assert summary.agi_days == 0
        assert summary.streaks == StreakResult()
