"""Snapshot container for the campaign record set.

A :class:`RecordSet` is an immutable snapshot of one loaded payload. The
:class:`RecordStore` holds the snapshot the process currently serves and
swaps it wholesale on reload, so every derivation reads one consistent
snapshot.
"""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from measure_agi.models import CampaignMeta, DailyChallenge, Participant
from measure_agi.normalize.common import validate_each

logger = logging.getLogger(__name__)

META_KEY = "meta"
CALENDAR_KEY = "calendarDays"
CHALLENGES_KEY = "dailyChallenges"
PARTICIPANTS_KEY = "participants"


@dataclass(frozen=True)
class RecordSet:
    """One loaded campaign payload.

    Calendar entries are kept exactly as received; the calendar normalizer
    deduplicates them on demand. Challenges and participants are parsed at
    load time, with invalid entries dropped.
    """

    meta: CampaignMeta = field(default_factory=CampaignMeta)
    calendar_days: tuple[Any, ...] = ()
    challenges: tuple[DailyChallenge, ...] = ()
    participants: tuple[Participant, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "RecordSet":
        """Build a snapshot from a decoded payload, failing soft.

        Absent or malformed top-level fields become empty; individual
        challenges and participants that fail validation are dropped.

        Args:
            payload: Decoded JSON payload.

        Returns:
            New RecordSet.
        """
        if not isinstance(payload, Mapping):
            logger.warning(
                "Payload is not an object (%s), using empty record set", type(payload).__name__
            )
            return cls()

        calendar_raw = payload.get(CALENDAR_KEY)
        if not isinstance(calendar_raw, (list, tuple)):
            if calendar_raw is not None:
                logger.warning("Ignoring non-list %s field", CALENDAR_KEY)
            calendar_raw = []

        snapshot = cls(
            meta=_parse_meta(payload.get(META_KEY)),
            calendar_days=tuple(copy.deepcopy(list(calendar_raw))),
            challenges=tuple(
                validate_each(DailyChallenge, payload.get(CHALLENGES_KEY), "daily challenge")
            ),
            participants=tuple(
                validate_each(Participant, payload.get(PARTICIPANTS_KEY), "participant")
            ),
        )

        logger.info(
            "Loaded record set: %d calendar entries, %d challenges, %d participants",
            len(snapshot.calendar_days),
            len(snapshot.challenges),
            len(snapshot.participants),
        )
        return snapshot

    @property
    def is_empty(self) -> bool:
        """Whether the snapshot holds no records of any kind."""
        return not (self.calendar_days or self.challenges or self.participants)


def _parse_meta(raw: Any) -> CampaignMeta:
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Ignoring non-object %s field", META_KEY)
        return CampaignMeta()
    try:
        return CampaignMeta.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid campaign metadata (%d error(s)), ignoring", e.error_count())
        return CampaignMeta()


class RecordStore:
    """Holds the snapshot currently served to derivations.

    Reloads replace the snapshot in a single reference swap; a snapshot is
    never modified after it is installed.
    """

    def __init__(self, snapshot: RecordSet | None = None) -> None:
        self._snapshot = snapshot if snapshot is not None else RecordSet()

    @property
    def snapshot(self) -> RecordSet:
        """The currently installed snapshot."""
        return self._snapshot

    def install(self, snapshot: RecordSet) -> RecordSet:
        """Replace the installed snapshot.

        Args:
            snapshot: Fully built snapshot to publish.

        Returns:
            The previously installed snapshot.
        """
        previous = self._snapshot
        self._snapshot = snapshot
        logger.debug("Installed new record set snapshot")
        return previous

    def load(self, payload: Any) -> RecordSet:
        """Parse a payload and install it as the current snapshot."""
        snapshot = RecordSet.from_payload(payload)
        self.install(snapshot)
        return snapshot
