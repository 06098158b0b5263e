"""Daily challenge scoring.

Tallies correct predictions per challenge and resolves each prediction's
author. Predictions may reference participants that are not in the record
set; those resolve to a placeholder identity instead of failing.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from measure_agi.models import (
    ChallengeScore,
    DailyChallenge,
    Participant,
    ParticipantId,
    ParticipantRef,
    ResolvedPrediction,
    ScoredChallenge,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Unknown"
PLACEHOLDER_TYPE = "LLM"

ParticipantLookup = Mapping[ParticipantId, Participant]


def participant_lookup(participants: Iterable[Participant]) -> dict[ParticipantId, Participant]:
    """Index participants by id. On duplicate ids the last one wins."""
    return {participant.id: participant for participant in participants}


def resolve_participant(
    lookup: ParticipantLookup,
    participant_id: ParticipantId | None,
) -> ParticipantRef:
    """Resolve a participant id to a reference.

    Args:
        lookup: Participants by id.
        participant_id: Id carried by a prediction; may be unknown or None.

    Returns:
        Reference to the participant, or the placeholder identity.
    """
    participant = lookup.get(participant_id) if participant_id is not None else None
    if participant is None:
        return ParticipantRef(
            id=participant_id,
            name=PLACEHOLDER_NAME,
            type=PLACEHOLDER_TYPE,
            placeholder=True,
        )
    return ParticipantRef(id=participant.id, name=participant.name, type=participant.type)


def score_challenge(challenge: DailyChallenge) -> ChallengeScore:
    """Count correct predictions of a challenge.

    Predictions with an unresolved ``isCorrect`` count toward the total but
    not as correct.
    """
    correct = sum(1 for prediction in challenge.predictions if prediction.is_correct is True)
    return ChallengeScore(correct_count=correct, total=len(challenge.predictions))


def resolve_predictions(
    challenge: DailyChallenge,
    lookup: ParticipantLookup,
) -> list[ResolvedPrediction]:
    """Pair each prediction of a challenge with its resolved author."""
    return [
        ResolvedPrediction(
            prediction=prediction,
            participant=resolve_participant(lookup, prediction.participant_id),
        )
        for prediction in challenge.predictions
    ]


def scored_challenge(challenge: DailyChallenge, lookup: ParticipantLookup) -> ScoredChallenge:
    """Score a challenge and resolve its predictions."""
    resolved = resolve_predictions(challenge, lookup)
    unresolved = sum(1 for item in resolved if item.participant.placeholder)
    if unresolved:
        logger.debug(
            "Challenge %s has %d prediction(s) from unknown participants", challenge.id, unresolved
        )
    return ScoredChallenge(
        challenge=challenge,
        score=score_challenge(challenge),
        predictions=resolved,
    )


def select_active_challenges(
    challenges: Sequence[DailyChallenge],
    current_day: int | None,
) -> list[DailyChallenge]:
    """Pick the challenges shown by default.

    When a current day is set and has challenges, only those are active.
    Otherwise every challenge is, in input order.

    Args:
        challenges: All challenges of the snapshot.
        current_day: Campaign current-day marker; None or 0 means unset.

    Returns:
        Active challenges.
    """
    if current_day:
        todays = [challenge for challenge in challenges if challenge.day == current_day]
        if todays:
            return todays
    return list(challenges)
