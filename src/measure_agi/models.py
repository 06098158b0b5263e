"""Record and derived-value models for the campaign dashboard.

Feed records use camelCase wire names (``agiDays``, ``isCorrect``) and keep
any extra fields they arrive with so that an exported snapshot round-trips.
Derived value objects are frozen and carry no presentation data.
"""

from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from measure_agi.normalize.common import (
    coerce_count,
    coerce_day,
    coerce_text,
    is_number,
    normalize_timestamp,
    validate_each,
)

Number = int | float
RecordId = str | int
ParticipantId = RecordId
Timestamp = Annotated[datetime | None, BeforeValidator(normalize_timestamp)]
Text = Annotated[str | None, BeforeValidator(coerce_text)]


class DayStatus(StrEnum):
    """Outcome tier of a calendar day."""

    AGI = "agi"
    EVALUATING = "evaluating"
    PENDING = "pending"
    MISSED = "missed"


class FeedModel(BaseModel):
    """Base for records decoded from the campaign payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump the record with wire names, omitting fields the feed never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# ---------------------------------------------------------------------------
# Feed records
# ---------------------------------------------------------------------------


class CalendarDayRecord(FeedModel):
    """One recorded campaign day."""

    day: int = Field(ge=1)
    status: DayStatus = DayStatus.PENDING
    correct: Number | None = None
    top_performer: Text = None
    note: Text = None

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> Any:
        """Unknown or missing statuses fall back to pending."""
        if v is None:
            return DayStatus.PENDING
        try:
            return DayStatus(v)
        except (TypeError, ValueError):
            return DayStatus.PENDING

    @field_validator("correct", mode="before")
    @classmethod
    def drop_non_numeric_correct(cls, v: Any) -> Any:
        return v if is_number(v) else None


class PerformancePoint(FeedModel):
    """Problems solved (0-10) by a participant on a day."""

    day: int
    solved: Number


def _is_usable_point(entry: Any) -> bool:
    return coerce_day(entry.get("day")) is not None and is_number(entry.get("solved"))


class Participant(FeedModel):
    """A ranked LLM API or agent system."""

    id: ParticipantId
    name: str = ""
    type: str = "LLM"
    agi_days: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_submission: Timestamp = None
    performance: list[PerformancePoint] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def lenient_name(cls, v: Any) -> str:
        return coerce_text(v) or ""

    @field_validator("type", mode="before")
    @classmethod
    def lenient_type(cls, v: Any) -> str:
        """Missing or unreadable cohorts default to LLM."""
        return coerce_text(v) or "LLM"

    @field_validator("agi_days", "longest_streak", mode="before")
    @classmethod
    def lenient_counts(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator("performance", mode="before")
    @classmethod
    def drop_unusable_points(cls, v: Any) -> list[PerformancePoint]:
        """Keep only points with a numeric day and solved count."""
        return validate_each(PerformancePoint, v, "performance point", _is_usable_point)


class Prediction(FeedModel):
    """A participant's answer to a daily challenge."""

    participant_id: ParticipantId | None = None
    is_correct: bool | None = None
    confidence: Number | None = None
    latency_ms: Number | None = None
    output: Text = None

    @field_validator("participant_id", mode="before")
    @classmethod
    def lenient_participant_id(cls, v: Any) -> Any:
        """Ids that are neither text nor integers count as missing."""
        if isinstance(v, str) or (isinstance(v, int) and not isinstance(v, bool)):
            return v
        return None

    @field_validator("is_correct", mode="before")
    @classmethod
    def lenient_is_correct(cls, v: Any) -> bool | None:
        """Only a JSON boolean resolves a prediction."""
        return v if isinstance(v, bool) else None

    @field_validator("confidence", "latency_ms", mode="before")
    @classmethod
    def drop_non_numeric(cls, v: Any) -> Any:
        return v if is_number(v) else None


class DailyChallenge(FeedModel):
    """A scored question posed on a campaign day."""

    id: RecordId
    day: int
    title: Text = None
    category: Text = None
    question: Text = None
    correct_answer: Text = None
    answer_options: list[str] | None = None
    timestamp: Timestamp = None
    predictions: list[Prediction] = Field(default_factory=list)

    @field_validator("predictions", mode="before")
    @classmethod
    def drop_invalid_predictions(cls, v: Any) -> list[Prediction]:
        return validate_each(Prediction, v, "prediction")

    @field_validator("answer_options", mode="before")
    @classmethod
    def lenient_answer_options(cls, v: Any) -> list[str] | None:
        if not isinstance(v, (list, tuple)):
            return None
        return [text for text in map(coerce_text, v) if text is not None]


class CampaignMeta(FeedModel):
    """Campaign-level metadata."""

    campaign_start: date | None = None
    current_day: int | None = None
    next_deadline_utc: Timestamp = Field(default=None, alias="nextDeadlineUTC")

    @field_validator("campaign_start", mode="before")
    @classmethod
    def lenient_start(cls, v: Any) -> Any:
        if v is None or isinstance(v, date):
            return v
        try:
            return date.fromisoformat(str(v)[:10])
        except ValueError:
            return None

    @field_validator("current_day", mode="before")
    @classmethod
    def lenient_current_day(cls, v: Any) -> int | None:
        return coerce_day(v)


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------


class DerivedModel(BaseModel):
    """Base for values computed from a snapshot."""

    model_config = ConfigDict(frozen=True)


class StreakResult(DerivedModel):
    """Current and longest runs of AGI days."""

    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)


class GoalProgress(DerivedModel):
    """Progress toward the consecutive-AGI-day goal."""

    goal_days: int
    fraction: float = Field(ge=0, le=1)
    achieved: bool
    longest_reached_goal: bool
    best: int
    remaining: int


class CalendarSummary(DerivedModel):
    """Headline calendar metrics."""

    days_tracked: int
    agi_days: int
    streaks: StreakResult


class CalendarSlot(DerivedModel):
    """One cell of the fixed-size calendar grid."""

    day: int
    record: CalendarDayRecord | None
    status: DayStatus
    is_today: bool
    intensity: float


class ParticipantRef(DerivedModel):
    """A resolved prediction author, possibly a placeholder."""

    id: ParticipantId | None
    name: str
    type: str
    placeholder: bool = False


class ChallengeScore(DerivedModel):
    """Correctness tally of one challenge."""

    correct_count: int
    total: int


class ResolvedPrediction(DerivedModel):
    """A prediction paired with its resolved author."""

    prediction: Prediction
    participant: ParticipantRef


class ScoredChallenge(DerivedModel):
    """A challenge with its tally and resolved predictions."""

    challenge: DailyChallenge
    score: ChallengeScore
    predictions: list[ResolvedPrediction]


class LeaderboardEntry(DerivedModel):
    """A participant's place on the leaderboard."""

    position: int
    participant: Participant
    goal_achieved: bool


class AggregatePoint(DerivedModel):
    """One chart point: a day and a 0-10 value."""

    day: int
    value: float = Field(ge=0, le=10)


class ParticipantSeries(DerivedModel):
    """A single participant's own performance line."""

    participant_id: ParticipantId
    name: str
    points: list[AggregatePoint]


class CohortSeries(DerivedModel):
    """Chart data for one cohort: the averaged line plus top participants."""

    cohort: str
    aggregate: list[AggregatePoint]
    participants: list[ParticipantSeries]

    @property
    def is_empty(self) -> bool:
        """Whether no line carries any point."""
        return not self.aggregate and not any(line.points for line in self.participants)


class DashboardMetrics(DerivedModel):
    """Every derived value the dashboard displays, from one snapshot."""

    meta: CampaignMeta
    summary: CalendarSummary
    goal: GoalProgress
    challenges: list[ScoredChallenge]
    leaderboard: list[LeaderboardEntry]
    series: dict[str, CohortSeries]
