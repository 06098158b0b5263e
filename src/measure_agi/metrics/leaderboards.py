"""Leaderboard ranker.

Orders participants by AGI days, highest first. Ties keep the order the
participants arrived in, so identical input always ranks identically.

Output (one LeaderboardEntry per participant):
    - position (int): 1-based ordinal position
    - participant (Participant): the ranked record
    - goal_achieved (bool): longest streak reached the goal; does not
      affect ordering
"""

import logging
from collections.abc import Iterable

import polars as pl

from measure_agi.metrics.streaks import GOAL_DAYS
from measure_agi.models import LeaderboardEntry, Participant

logger = logging.getLogger(__name__)


def rank_participants(
    participants: Iterable[Participant],
    goal_days: int = GOAL_DAYS,
    cohort: str | None = None,
) -> list[LeaderboardEntry]:
    """Rank participants by AGI days descending.

    Args:
        participants: Participants in feed order.
        goal_days: Longest streak at which a participant is flagged as
            having achieved the goal.
        cohort: Restrict the board to one participant type, e.g. "Agent".

    Returns:
        Ranked entries; empty list for empty input.
    """
    pool = [p for p in participants if cohort is None or p.type == cohort]
    if not pool:
        logger.debug("No participants to rank (cohort=%s)", cohort)
        return []

    frame = pl.DataFrame(
        {
            "input_order": list(range(len(pool))),
            "agi_days": [p.agi_days for p in pool],
        },
        schema={"input_order": pl.Int64, "agi_days": pl.Int64},
    )

    # input_order as secondary key keeps ties in feed order
    ordered = frame.sort(
        ["agi_days", "input_order"],
        descending=[True, False],
        maintain_order=True,
    )

    entries = [
        LeaderboardEntry(
            position=position,
            participant=pool[index],
            goal_achieved=pool[index].longest_streak >= goal_days,
        )
        for position, index in enumerate(ordered["input_order"].to_list(), start=1)
    ]

    logger.debug(
        "Ranked %d participants (cohort=%s), %d at goal",
        len(entries),
        cohort,
        sum(1 for entry in entries if entry.goal_achieved),
    )
    return entries
