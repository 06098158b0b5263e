"""Logging setup for processes that load and derive dashboard data.

Payload sources can be signed URLs, so credentials in query strings and
authorization headers are redacted before any record is written.
"""

import logging
import re

from measure_agi.config import LoggingConfig

# Query parameters that carry credentials in signed or keyed data URLs
_SECRET_PARAMS = (
    r"access_?token|token|api[_-]?key|key|sig|signature|x-amz-signature|x-amz-credential"
)

SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"Bearer\s+[\w\-\.]+"), "Bearer [REDACTED]"),
    (re.compile(r"(Authorization:\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(rf"\b((?:{_SECRET_PARAMS})=)[^&#\s]+", re.IGNORECASE), r"\1[REDACTED]"),
]

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"name": "%(name)s", "message": "%(message)s"}'
)


def redact(text: str) -> str:
    """Replace credential values in a message or URL with ``[REDACTED]``."""
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretRedactingFilter(logging.Filter):
    """Filter that redacts credentials from the message and its string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(redact(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True


def setup_logging(settings: LoggingConfig | None = None) -> None:
    """Configure the root logger from the ``logging`` config section.

    Args:
        settings: Logging section; defaults to INFO level text output.
    """
    settings = settings or LoggingConfig()

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.INFO,
        format=JSON_FORMAT if settings.json_format else TEXT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    redaction_filter = SecretRedactingFilter()
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(redaction_filter)

    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
