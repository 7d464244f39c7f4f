"""Logging for the ghfeedback CLI and service.

Levels (inclusive):
- ERROR: failed GitHub calls (load, submit, vote)
- WARNING: unreadable or unwritable local vote/ownership files, and ERROR
- INFO: submitted feedback, votes, comments, WARNING, and ERROR
- DEBUG: list sizes plus urllib3 connection traces

Configure via config.yaml (logging.level, logging.format), env
(LOGGING_LEVEL, LOGGING_FORMAT) or ``ghfeedback --verbose`` (forces DEBUG).
Log records go to stderr so command output on stdout stays clean.
"""

import logging
import sys

from ghfeedback.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP client loggers; only shown when running at DEBUG
HTTP_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class FeedbackLogging:
    """Configures root logger from LoggingConfig, with a verbose override."""

    def __init__(self, config: LoggingConfig, verbose: bool = False) -> None:
        """Store level and format; ``verbose`` wins over the configured level."""
        self.level = logging.DEBUG if verbose else _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Send records to stderr and quiet the HTTP client below DEBUG."""
        logging.basicConfig(
            level=self.level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        http_level = logging.NOTSET if self.level <= logging.DEBUG else logging.WARNING
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(http_level)
