"""Streak and goal-progress calculator.

Works on the day-ascending canonical calendar records. Only recorded days
count: a gap in day numbers does not break a run, an explicit non-AGI
record does.
"""

import logging
from collections.abc import Sequence

from measure_agi.models import (
    CalendarDayRecord,
    CalendarSummary,
    DayStatus,
    GoalProgress,
    StreakResult,
)

logger = logging.getLogger(__name__)

GOAL_DAYS = 100


def compute_streaks(records: Sequence[CalendarDayRecord]) -> StreakResult:
    """Compute the current and longest AGI-day streaks.

    Args:
        records: Canonical calendar records. Sorted by day here, so callers
            may pass them in any order.

    Returns:
        StreakResult; zeros for empty input.
    """
    if not records:
        return StreakResult(current=0, longest=0)

    ordered = sorted(records, key=lambda record: record.day)

    longest = 0
    running = 0
    for record in ordered:
        if record.status is DayStatus.AGI:
            running += 1
            longest = max(longest, running)
        else:
            running = 0

    # The scan ends on the last record, so the open run is the current streak
    return StreakResult(current=running, longest=longest)


def goal_progress(streaks: StreakResult, goal_days: int = GOAL_DAYS) -> GoalProgress:
    """Describe progress toward ``goal_days`` consecutive AGI days.

    The completion fraction follows the longest streak. Whether the goal is
    achieved right now follows the current streak. ``remaining`` uses the
    better of the two so the displayed distance never regresses when a
    streak breaks.

    Args:
        streaks: Output of :func:`compute_streaks`.
        goal_days: Required consecutive AGI days.

    Returns:
        GoalProgress view.

    Raises:
        ValueError: If ``goal_days`` is not positive.
    """
    if goal_days < 1:
        msg = f"goal_days must be positive, got {goal_days}"
        raise ValueError(msg)

    best = max(streaks.longest, streaks.current)
    return GoalProgress(
        goal_days=goal_days,
        fraction=min(streaks.longest, goal_days) / goal_days,
        achieved=streaks.current >= goal_days,
        longest_reached_goal=streaks.longest >= goal_days,
        best=best,
        remaining=max(goal_days - best, 0),
    )


def summarize_calendar(records: Sequence[CalendarDayRecord]) -> CalendarSummary:
    """Headline counts for the calendar: days tracked, AGI days, streaks."""
    summary = CalendarSummary(
        days_tracked=len(records),
        agi_days=sum(1 for record in records if record.status is DayStatus.AGI),
        streaks=compute_streaks(records),
    )
    logger.debug(
        "Calendar summary: %d tracked, %d AGI, current streak %d, longest %d",
        summary.days_tracked,
        summary.agi_days,
        summary.streaks.current,
        summary.streaks.longest,
    )
    return summary
