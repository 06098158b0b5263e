"""Calendar-day normalizer.

Turns the raw ``calendarDays`` feed into one canonical record per day and
exposes the fixed-size campaign calendar as a lazy view over that sparse
mapping.

Rules:
    - entries whose ``day`` is not a number are dropped silently
    - duplicate days: the entry seen last wins
    - days missing from the feed show up as pending slots with no record
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from measure_agi.metrics.intensity import day_intensity
from measure_agi.models import CalendarDayRecord, CalendarSlot, DayStatus
from measure_agi.normalize.common import coerce_day, validate_each

logger = logging.getLogger(__name__)

DEFAULT_CALENDAR_DAYS = 100


def _has_numeric_day(entry: Mapping[str, Any]) -> bool:
    return coerce_day(entry.get("day")) is not None


def normalize_calendar(entries: Iterable[Any] | None) -> dict[int, CalendarDayRecord]:
    """Deduplicate raw calendar entries into a mapping keyed by day.

    Args:
        entries: Raw calendar entries (mappings or already-parsed records).

    Returns:
        Mapping from day number to the canonical record for that day, in
        first-seen insertion order.
    """
    raw = list(entries) if entries is not None else []
    records = validate_each(CalendarDayRecord, raw, "calendar day", _has_numeric_day)

    by_day: dict[int, CalendarDayRecord] = {}
    for record in records:
        by_day[record.day] = record

    dropped = len(raw) - len(records)
    if dropped:
        logger.debug("Dropped %d malformed calendar entries", dropped)
    logger.debug("Normalized %d calendar entries into %d days", len(raw), len(by_day))
    return by_day


def calendar_records(entries: Iterable[Any] | None) -> list[CalendarDayRecord]:
    """Return the canonical calendar records sorted by day ascending."""
    return sorted(normalize_calendar(entries).values(), key=lambda record: record.day)


class CalendarView:
    """Fixed-size calendar grid over a sparse day mapping.

    Slots are built on access; nothing is materialized up front.
    """

    def __init__(
        self,
        records: Mapping[int, CalendarDayRecord],
        size: int = DEFAULT_CALENDAR_DAYS,
        current_day: int | None = None,
    ) -> None:
        if size < 1:
            msg = f"Calendar size must be positive, got {size}"
            raise ValueError(msg)
        self._records = records
        self.size = size
        self.current_day = current_day

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[CalendarSlot]:
        for day in range(1, self.size + 1):
            yield self.slot(day)

    def __getitem__(self, day: int) -> CalendarSlot:
        return self.slot(day)

    def record(self, day: int) -> CalendarDayRecord | None:
        """Return the recorded entry for a grid day, if any."""
        self._check_day(day)
        return self._records.get(day)

    def slot(self, day: int) -> CalendarSlot:
        """Build the grid cell for a day.

        Args:
            day: 1-based day index within the grid.

        Returns:
            The slot, with a pending placeholder status when unrecorded.

        Raises:
            IndexError: If ``day`` lies outside ``1..size``.
        """
        record = self.record(day)
        status = record.status if record is not None else DayStatus.PENDING
        correct = record.correct if record is not None else None
        return CalendarSlot(
            day=day,
            record=record,
            status=status,
            is_today=day == self.current_day,
            intensity=day_intensity(status, correct),
        )

    def _check_day(self, day: int) -> None:
        if not 1 <= day <= self.size:
            msg = f"Day {day} outside calendar range 1..{self.size}"
            raise IndexError(msg)
