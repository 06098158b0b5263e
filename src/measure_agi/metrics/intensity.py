"""Calendar intensity mapper.

Maps a day's status and accuracy (``correct`` out of 10) to the alpha the
calendar grid paints that day with. Colors are a rendering concern; only
the scalar is computed here.
"""

from measure_agi.models import DayStatus, Number

MIN_INTENSITY = 0.12
MAX_INTENSITY = 0.95

# Unrecognized statuses render with a neutral level
UNKNOWN_STATUS_INTENSITY = 0.4

BASE_INTENSITY: dict[DayStatus, float] = {
    DayStatus.AGI: 0.35,
    DayStatus.EVALUATING: 0.32,
    DayStatus.PENDING: 0.24,
    DayStatus.MISSED: 0.32,
}


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def accuracy_ratio(correct: Number) -> float:
    """Fraction of the day's ten problems solved, clamped to [0, 1]."""
    return _clamp(correct / 10, 0.0, 1.0)


def day_intensity(status: DayStatus | str, correct: Number | None = None) -> float:
    """Compute the visual intensity of a calendar day.

    Accuracy raises intensity for agi, evaluating and pending days. For
    missed days it lowers it, so a narrow miss reads softer than a wide one.

    Args:
        status: Day status.
        correct: Problems solved out of 10, or None when not recorded.

    Returns:
        Intensity within [MIN_INTENSITY, MAX_INTENSITY].
    """
    try:
        status = DayStatus(status)
    except (TypeError, ValueError):
        return _clamp(UNKNOWN_STATUS_INTENSITY, MIN_INTENSITY, MAX_INTENSITY)

    intensity = BASE_INTENSITY[status]
    if correct is not None:
        ratio = accuracy_ratio(correct)
        if status is DayStatus.AGI:
            intensity = 0.25 + ratio * 0.7
        elif status is DayStatus.MISSED:
            intensity = 0.25 + (1 - ratio) * 0.5
        elif status is DayStatus.EVALUATING:
            intensity = 0.25 + ratio * 0.4
        else:
            intensity = 0.18 + ratio * 0.3

    return _clamp(intensity, MIN_INTENSITY, MAX_INTENSITY)
