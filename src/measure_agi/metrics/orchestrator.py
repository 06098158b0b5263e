"""Dashboard metrics orchestrator.

Runs every derivation over one record-set snapshot and bundles the results
into a single DashboardMetrics value.
"""

import logging
from datetime import datetime

from measure_agi.config import Config
from measure_agi.metrics.challenges import (
    participant_lookup,
    scored_challenge,
    select_active_challenges,
)
from measure_agi.metrics.leaderboards import rank_participants
from measure_agi.metrics.streaks import goal_progress, summarize_calendar
from measure_agi.metrics.timeseries import build_cohort_series
from measure_agi.models import DashboardMetrics
from measure_agi.normalize.calendar import CalendarView, calendar_records, normalize_calendar
from measure_agi.state import RecordSet

logger = logging.getLogger(__name__)


def compute_dashboard(snapshot: RecordSet, config: Config | None = None) -> DashboardMetrics:
    """Derive every dashboard value from a snapshot.

    Args:
        snapshot: Installed record set.
        config: Application configuration; defaults apply when omitted.

    Returns:
        DashboardMetrics for the snapshot.
    """
    config = config or Config()
    campaign = config.campaign
    start_time = datetime.now()

    records = calendar_records(snapshot.calendar_days)
    summary = summarize_calendar(records)
    goal = goal_progress(summary.streaks, campaign.goal_days)

    lookup = participant_lookup(snapshot.participants)
    active = select_active_challenges(snapshot.challenges, snapshot.meta.current_day)
    challenges = [scored_challenge(challenge, lookup) for challenge in active]

    leaderboard = rank_participants(snapshot.participants, goal_days=campaign.goal_days)

    series = {
        cohort: build_cohort_series(
            cohort,
            snapshot.participants,
            snapshot.challenges,
            top_n=campaign.top_participants,
        )
        for cohort in campaign.cohorts
    }

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(
        "Computed dashboard in %.3fs: %d days tracked, %d active challenges, "
        "%d ranked participants, %d cohort series",
        duration,
        summary.days_tracked,
        len(challenges),
        len(leaderboard),
        len(series),
    )

    return DashboardMetrics(
        meta=snapshot.meta,
        summary=summary,
        goal=goal,
        challenges=challenges,
        leaderboard=leaderboard,
        series=series,
    )


def calendar_view(snapshot: RecordSet, config: Config | None = None) -> CalendarView:
    """Build the lazy calendar grid for a snapshot."""
    config = config or Config()
    return CalendarView(
        normalize_calendar(snapshot.calendar_days),
        size=config.campaign.calendar_days,
        current_day=snapshot.meta.current_day,
    )
