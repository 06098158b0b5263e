"""Common utilities for feed normalization.

Shared coercion helpers used by the record models and the calendar
normalizer. Every helper is total: bad input yields ``None`` (or is
filtered out) instead of raising.
"""

import logging
import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_number(value: Any) -> bool:
    """Check whether a decoded JSON value is a finite number.

    Booleans are excluded even though ``bool`` subclasses ``int``.

    Args:
        value: Decoded JSON value.

    Returns:
        True for finite ints and floats.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def coerce_day(value: Any) -> int | None:
    """Coerce a feed ``day`` value to an integer day number.

    Only numeric values are accepted; ``"3"`` is not a day. Integral floats
    such as ``3.0`` become ``3``.

    Args:
        value: Raw ``day`` value.

    Returns:
        Day number or None if the value is not a usable day.
    """
    if not is_number(value):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        return int(value)
    return int(value)


def normalize_timestamp(ts: Any) -> datetime | None:
    """Normalize an ISO 8601 timestamp to a UTC datetime.

    Handles the ``Z`` suffix used by the feed (e.g. "2024-07-01T12:00:00Z").

    Args:
        ts: ISO 8601 timestamp string, datetime, or None.

    Returns:
        UTC datetime object or None if input is None or invalid.
    """
    if ts is None:
        return None

    if isinstance(ts, datetime):
        dt = ts
    else:
        try:
            dt = datetime.fromisoformat(str(ts).replace("Z", "+00:00"))
        except ValueError as e:
            logger.warning("Failed to parse timestamp '%s': %s", ts, e)
            return None

    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def coerce_text(value: Any) -> str | None:
    """Coerce a display field to text.

    Numbers and booleans are rendered with their JSON spelling, so a yes/no
    answer of ``true`` reads ``"true"``. Objects and arrays are not text.

    Args:
        value: Raw field value.

    Returns:
        Text or None if the value has no text form.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return str(int(value)) if isinstance(value, float) and value.is_integer() else str(value)
    return None


def coerce_count(value: Any) -> int:
    """Coerce a non-negative counter such as ``agiDays``.

    Numeric strings are accepted, fractions are truncated, and anything
    unusable counts as zero.
    """
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if not is_number(value) or value < 0:
        return 0
    return int(value)


def validate_each(
    model: type[ModelT],
    items: Any,
    label: str,
    precheck: Callable[[Mapping[str, Any]], bool] | None = None,
) -> list[ModelT]:
    """Validate a sequence of raw entries, dropping the ones that fail.

    Args:
        model: Pydantic model to validate each entry against.
        items: Raw sequence; anything that is not a list or tuple counts as empty.
        label: Entry kind used in log messages.
        precheck: Optional predicate run on each mapping before validation.

    Returns:
        Validated models in input order.
    """
    if not isinstance(items, (list, tuple)):
        if items is not None:
            logger.warning("Expected a list of %s, got %s", label, type(items).__name__)
        return []

    valid: list[ModelT] = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            valid.append(item)
            continue
        if not isinstance(item, Mapping) or (precheck is not None and not precheck(item)):
            logger.debug("Dropping malformed %s at index %d", label, index)
            continue
        try:
            valid.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "Dropping invalid %s at index %d: %d error(s)", label, index, e.error_count()
            )
    return valid
