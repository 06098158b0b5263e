"""Per-cohort performance series for the charts.

Two kinds of evidence describe how well a cohort did on a day, and both
feed the same average:

    - performance points: each participant's ``solved`` value (0-10)
    - challenge predictions: 10 for a correct prediction, 0 otherwise,
      dated by the challenge's day

Samples are grouped by day and averaged (two decimals). Days without
samples are left out, never zero-filled, so charts show them as gaps.

Alongside the cohort average, the top-ranked participants of the cohort get
their own line built from their performance points alone.
"""

import logging
from collections.abc import Sequence
from typing import Any

import pandas as pd

from measure_agi.metrics.challenges import participant_lookup, resolve_participant
from measure_agi.metrics.leaderboards import rank_participants
from measure_agi.models import (
    AggregatePoint,
    CohortSeries,
    DailyChallenge,
    Number,
    Participant,
    ParticipantSeries,
)

logger = logging.getLogger(__name__)

MAX_SOLVED = 10.0
TOP_PARTICIPANTS = 4


def _clamp_solved(value: Number) -> float:
    return float(min(max(value, 0.0), MAX_SOLVED))


def build_aggregate_series(
    cohort: str,
    participants: Sequence[Participant],
    challenges: Sequence[DailyChallenge],
) -> list[AggregatePoint]:
    """Average all evidence for a cohort into one value per day.

    Args:
        cohort: Participant type to aggregate, e.g. "LLM".
        participants: All participants of the snapshot.
        challenges: All challenges of the snapshot.

    Returns:
        Day-ascending points; empty when the cohort has no samples.
    """
    samples = _collect_samples(cohort, participants, challenges)
    if not samples:
        logger.debug("No samples for cohort %s", cohort)
        return []

    df = pd.DataFrame(samples)
    totals = df.groupby("day", sort=True)["value"].agg(["sum", "count"])

    points = [
        AggregatePoint(day=int(day), value=round(float(total) / int(count), 2))
        for day, total, count in zip(totals.index, totals["sum"], totals["count"], strict=True)
    ]

    logger.debug(
        "Cohort %s: %d samples (%d from predictions) over %d days",
        cohort,
        len(df),
        int((df["source"] == "prediction").sum()),
        len(points),
    )
    return points


def _collect_samples(
    cohort: str,
    participants: Sequence[Participant],
    challenges: Sequence[DailyChallenge],
) -> list[dict[str, Any]]:
    """Gather (day, value) samples of both evidence kinds for a cohort."""
    samples: list[dict[str, Any]] = []

    for participant in participants:
        if participant.type != cohort:
            continue
        for point in participant.performance:
            samples.append(
                {"day": point.day, "value": _clamp_solved(point.solved), "source": "performance"}
            )

    lookup = participant_lookup(participants)
    for challenge in challenges:
        for prediction in challenge.predictions:
            author = resolve_participant(lookup, prediction.participant_id)
            # Placeholder authors belong to no cohort
            if author.placeholder or author.type != cohort:
                continue
            samples.append(
                {
                    "day": challenge.day,
                    "value": MAX_SOLVED if prediction.is_correct is True else 0.0,
                    "source": "prediction",
                }
            )

    return samples


def build_participant_series(participant: Participant) -> ParticipantSeries:
    """Build a participant's own line from their performance points."""
    ordered = sorted(participant.performance, key=lambda point: point.day)
    return ParticipantSeries(
        participant_id=participant.id,
        name=participant.name,
        points=[
            AggregatePoint(day=point.day, value=_clamp_solved(point.solved)) for point in ordered
        ],
    )


def build_cohort_series(
    cohort: str,
    participants: Sequence[Participant],
    challenges: Sequence[DailyChallenge],
    top_n: int = TOP_PARTICIPANTS,
) -> CohortSeries:
    """Build the chart data for one cohort.

    Args:
        cohort: Participant type.
        participants: All participants of the snapshot.
        challenges: All challenges of the snapshot.
        top_n: How many top-ranked participants get their own line.
            Ranked participants without performance points take a slot
            but draw no line.

    Returns:
        CohortSeries with the aggregate line and individual lines.
    """
    top = rank_participants(participants, cohort=cohort)[: max(top_n, 0)]
    lines = [build_participant_series(entry.participant) for entry in top]

    series = CohortSeries(
        cohort=cohort,
        aggregate=build_aggregate_series(cohort, participants, challenges),
        participants=[line for line in lines if line.points],
    )
    if series.is_empty:
        logger.info("No %s data available yet", cohort)
    return series
