"""Derived dashboard metrics: streaks, scoring, rankings, series, intensity.

The orchestrator is imported from ``measure_agi.metrics.orchestrator``
directly; it depends on the calendar normalizer, which depends on this
package.
"""

from measure_agi.metrics.challenges import (
    participant_lookup,
    resolve_participant,
    score_challenge,
    scored_challenge,
    select_active_challenges,
)
from measure_agi.metrics.intensity import day_intensity
from measure_agi.metrics.leaderboards import rank_participants
from measure_agi.metrics.streaks import compute_streaks, goal_progress, summarize_calendar
from measure_agi.metrics.timeseries import (
    build_aggregate_series,
    build_cohort_series,
    build_participant_series,
)

__all__ = [
    "build_aggregate_series",
    "build_cohort_series",
    "build_participant_series",
    "compute_streaks",
    "day_intensity",
    "goal_progress",
    "participant_lookup",
    "rank_participants",
    "resolve_participant",
    "score_challenge",
    "scored_challenge",
    "select_active_challenges",
    "summarize_calendar",
]
