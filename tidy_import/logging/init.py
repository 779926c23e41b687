from __future__ import annotations

import logging
import sys
from collections import Counter
from collections.abc import Iterable

from ..models.validation import DuplicateGroup, RowValidation

"""Labeled console logging for the cleaner CLI.

Every CLI line is ``<LABEL> <message>`` with labels
DEBUG|INFO|WARN|ERROR|CRITICAL|SUMMARY. Engine modules only use
``logging.getLogger(__name__)`` under the ``tidy_import`` namespace and never
attach handlers themselves; the handler configured here picks them up.

Besides the SUMMARY line, a run reports what is left to fix in the exported
rows as one WARN breakdown line (``log_issue_breakdown``).
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "log_issue_breakdown",
    "issue_breakdown",
    "enable_debug",
    "reset_logging",
]

APP_LOGGER_NAME = "tidy_import"

# Between INFO=20 and WARNING=30, so --debug is not needed to see it
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Render records as ``LABEL message``."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.LEVEL_LABELS.get(record.levelno, record.levelname)} {record.getMessage()}"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the ``tidy_import`` logger on stdout. Idempotent.

    ``debug`` lowers the level to DEBUG, also on an already configured logger.
    """
    global _logger

    if _logger is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        logger = logging.getLogger(APP_LOGGER_NAME)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(LabeledFormatter())
        logger.addHandler(handler)
        # stdout is the CLI contract; the root logger must not echo lines
        logger.propagate = False
        _set_level(logger, logging.INFO)
        _logger = logger

    if debug:
        _set_level(_logger, logging.DEBUG)
    return _logger


def _set_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)


def get_logger() -> logging.Logger:
    """The application logger (configured on first use)."""
    return _logger if _logger is not None else setup_logging()


def enable_debug() -> None:
    setup_logging(debug=True)


def log_summary(message: str) -> None:
    """Log at SUMMARY level; the formatter adds the label."""
    get_logger().log(SUMMARY_LEVEL, message)


def issue_breakdown(
    validations: Iterable[RowValidation], duplicates: Iterable[DuplicateGroup] = ()
) -> dict[str, int]:
    """Count issue labels over all rows, most frequent first (ties by name).

    Duplicate groups are counted as ``DUPLICATE_<FIELD>`` once per group.
    """
    counts: Counter[str] = Counter()
    for v in validations:
        counts.update(v.issue_types())
    for group in duplicates:
        counts[f"DUPLICATE_{group.field.upper()}"] += 1
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def log_issue_breakdown(
    validations: Iterable[RowValidation], duplicates: Iterable[DuplicateGroup] = ()
) -> None:
    """One WARN line ``issues: LABEL=n ...``; nothing when the rows are clean."""
    counts = issue_breakdown(validations, duplicates)
    if counts:
        get_logger().warning("issues: " + " ".join(f"{label}={n}" for label, n in counts.items()))


def reset_logging() -> None:
    """Forget the configured logger (tests)."""
    global _logger
    _logger = None
