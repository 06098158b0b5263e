"""Export the raw record set to a JSON snapshot.

The export is a direct dump of the installed snapshot for user download,
not a derived report. Field names follow the feed's wire format so the file
can be loaded back as a payload.

Output structure:
    {
        "meta": {...},
        "calendarDays": [...],   # as received, duplicates included
        "dailyChallenges": [...],
        "participants": [...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any

from measure_agi.state import CALENDAR_KEY, CHALLENGES_KEY, META_KEY, PARTICIPANTS_KEY, RecordSet

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "measure-agi-data.json"


def dump_snapshot(snapshot: RecordSet) -> dict[str, Any]:
    """Serialize a snapshot to a JSON-safe dictionary.

    Args:
        snapshot: Record set to dump.

    Returns:
        Dictionary with the four top-level payload fields.
    """
    return {
        META_KEY: snapshot.meta.to_wire(),
        CALENDAR_KEY: [_jsonable(entry) for entry in snapshot.calendar_days],
        CHALLENGES_KEY: [challenge.to_wire() for challenge in snapshot.challenges],
        PARTICIPANTS_KEY: [participant.to_wire() for participant in snapshot.participants],
    }


def export_snapshot(snapshot: RecordSet, output_path: Path | None = None) -> Path:
    """Write a snapshot to a JSON file.

    Args:
        snapshot: Record set to export.
        output_path: Destination file; defaults to ``measure-agi-data.json``
            in the working directory. Parent directories are created.

    Returns:
        Path of the written file.
    """
    output_path = output_path or Path(DEFAULT_EXPORT_FILENAME)
    data = dump_snapshot(snapshot)
    _write_json(data, output_path)
    logger.info("Exported record set to %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path


def _jsonable(entry: Any) -> Any:
    # Calendar entries are kept raw but may already be parsed records
    to_wire = getattr(entry, "to_wire", None)
    return to_wire() if callable(to_wire) else entry


def _write_json(data: Any, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        f.write("\n")
