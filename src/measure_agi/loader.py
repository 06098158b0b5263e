"""Campaign payload loading with fallback data.

Fetches the payload from a URL or reads it from disk. Any failure (network
error, non-2xx response, missing file, bad JSON) is logged and replaced by
a minimal built-in payload so the derivations always have input.
"""

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import httpx

from measure_agi import __version__
from measure_agi.config import Config
from measure_agi.logging import redact
from measure_agi.state import RecordSet

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
FALLBACK_CAMPAIGN_START = "2024-07-01"
FALLBACK_DEADLINE_HOURS = 12


def fallback_payload(now: datetime | None = None) -> dict[str, Any]:
    """Build the minimal payload used when loading fails.

    Args:
        now: Reference time; defaults to the current UTC time.

    Returns:
        Payload with a single pending kick-off day and no challenges or
        participants.
    """
    now = now or datetime.now(UTC)
    deadline = now + timedelta(hours=FALLBACK_DEADLINE_HOURS)
    return {
        "meta": {
            "campaignStart": FALLBACK_CAMPAIGN_START,
            "currentDay": 1,
            "nextDeadlineUTC": deadline.isoformat().replace("+00:00", "Z"),
        },
        "calendarDays": [
            {
                "day": 1,
                "date": now.date().isoformat(),
                "status": "pending",
                "correct": 0,
                "topPerformer": "N/A",
                "note": "Kick-off day",
            }
        ],
        "dailyChallenges": [],
        "participants": [],
    }


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _fetch_remote(url: str, timeout: float) -> Any:
    response = httpx.get(
        url,
        timeout=timeout,
        follow_redirects=True,
        headers={
            "Accept": "application/json",
            "Cache-Control": "no-cache",
            "User-Agent": f"measure-agi/{__version__}",
        },
    )
    response.raise_for_status()
    return response.json()


def _read_local(path: Path) -> Any:
    if not path.exists():
        msg = f"Payload file not found: {path}"
        raise FileNotFoundError(msg)
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def load_payload(source: str | Path, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Load the raw campaign payload.

    Args:
        source: http(s) URL or filesystem path of the JSON payload.
        timeout: Request timeout in seconds for remote sources.

    Returns:
        Decoded payload, or :func:`fallback_payload` if loading failed.
    """
    display = redact(str(source))
    try:
        if _is_url(source):
            logger.debug("Fetching payload from %s", display)
            payload = _fetch_remote(str(source), timeout)
        else:
            logger.debug("Reading payload from %s", display)
            payload = _read_local(Path(source))
    except (httpx.HTTPError, OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(
            "Error loading data from %s, using fallback data: %s", display, redact(str(e))
        )
        return fallback_payload()

    logger.info("Loaded payload from %s", display)
    return payload


def load_record_set(config: Config) -> RecordSet:
    """Load the configured payload and parse it into a snapshot."""
    payload = load_payload(config.data.source, timeout=config.data.timeout_seconds)
    return RecordSet.from_payload(payload)
