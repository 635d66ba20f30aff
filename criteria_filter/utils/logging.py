"""Structured logging for criteria filter operations.

This module records the lifecycle of a filter: criteria registered or
discarded, resets and inclusion policy changes.

Entries are retained for reporting through get_log_entries(). Events raised
while matching resources (match results, evaluation errors, lenient numeric
non-matches) go through module-level helpers and are not retained, since a
filter may be evaluated against any number of resources.

Resource values are never written to the log, only property keys.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

# Configure module logger
logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Log levels for filter operations."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ActionType(Enum):
    """Types of actions that can be logged."""

    REGISTER = "REGISTER"
    DISCARD = "DISCARD"
    RESET = "RESET"
    POLICY = "POLICY"


@dataclass
class LogEntry:
    """Structured log entry for a filter event."""

    timestamp: datetime
    level: LogLevel
    action: ActionType
    key: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary for structured logging."""
        entry = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "action": self.action.value,
            "key": self.key,
            "message": self.message,
        }
        if self.details:
            entry["details"] = self.details
        return entry


class FilterLogger:
    """Structured logging for a single filter instance.

    Every entry is written to the module logger with a "[ACTION] key: message"
    prefix and kept in memory so callers can inspect what happened to the
    filter, e.g. which criteria were discarded at registration.
    """

    def __init__(self, filter_name: str = "filter"):
        """
        Initialize filter logger.

        Args:
            filter_name: Name used to tell filters apart in log output
        """
        self.filter_name = filter_name
        self._log_entries: List[LogEntry] = []

    def _create_entry(
        self,
        level: LogLevel,
        action: ActionType,
        key: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> LogEntry:
        return LogEntry(
            timestamp=datetime.now(timezone.utc),
            level=level,
            action=action,
            key=key,
            message=message,
            details=dict(details) if details else {},
        )

    def _log(self, entry: LogEntry) -> None:
        """Write entry to the module logger and store it for reporting."""
        self._log_entries.append(entry)

        log_message = f"[{self.filter_name}] [{entry.action.value}] {entry.key}: {entry.message}"

        if entry.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in entry.details.items())
            log_message += f" ({detail_str})"

        if entry.level == LogLevel.DEBUG:
            logger.debug(log_message)
        elif entry.level == LogLevel.INFO:
            logger.info(log_message)
        elif entry.level == LogLevel.WARNING:
            logger.warning(log_message)
        elif entry.level == LogLevel.ERROR:
            logger.error(log_message)
        elif entry.level == LogLevel.CRITICAL:
            logger.critical(log_message)

    # Registration

    def log_criterion_added(self, key: str, rendered: str, criteria_for_key: int) -> None:
        """Log a criterion appended to the filter."""
        entry = self._create_entry(
            level=LogLevel.INFO,
            action=ActionType.REGISTER,
            key=key,
            message=f"Criterion added: {rendered}",
            details={"criteria_for_key": criteria_for_key},
        )
        self._log(entry)

    def log_criterion_discarded(self, key: str, operator: str, reason: str) -> None:
        """Log a criterion dropped at registration."""
        entry = self._create_entry(
            level=LogLevel.WARNING,
            action=ActionType.DISCARD,
            key=key,
            message=f"Criterion discarded: {reason}",
            details={"operator": operator},
        )
        self._log(entry)

    # Filter state

    def log_reset(self, discarded_count: int) -> None:
        """Log removal of all criteria."""
        entry = self._create_entry(
            level=LogLevel.INFO,
            action=ActionType.RESET,
            key="*",
            message="All criteria removed",
            details={"discarded_count": discarded_count},
        )
        self._log(entry)

    def log_policy_changed(self, allow_missing_fields: bool) -> None:
        """Log a change of the inclusion policy."""
        mode = "inclusive" if allow_missing_fields else "exclusive"
        entry = self._create_entry(
            level=LogLevel.INFO,
            action=ActionType.POLICY,
            key="*",
            message=f"Inclusion policy set to {mode}",
            details={"allow_missing_fields": allow_missing_fields},
        )
        self._log(entry)

    def get_log_entries(self) -> List[LogEntry]:
        """Get all log entries for reporting."""
        return self._log_entries.copy()

    def clear(self) -> None:
        """Drop all retained log entries."""
        self._log_entries.clear()


# Convenience functions for module-level logging


def log_match_result(
    filter_name: str,
    matched: bool,
    failed_key: Optional[str] = None,
    reason: Optional[str] = None,
) -> None:
    """Log the outcome of matching one resource at DEBUG level."""
    status = "MATCH" if matched else "NO MATCH"
    message = f"[{filter_name}] [EVALUATE] {status}"
    if failed_key is not None:
        message += f" (failed on key '{failed_key}')"
    if reason:
        message += f" - {reason}"
    logger.debug(message)


def log_evaluation_error(filter_name: str, key: str, rendered: str, error: Exception) -> None:
    """Log an error raised while evaluating a criterion at ERROR level."""
    message = f"[{filter_name}] [EVALUATE] {key}: Evaluation failed for '{rendered}'"
    message += f" - Error: {type(error).__name__}: {error}"
    cause = error.__cause__
    if cause is not None:
        message += f" (caused by {type(cause).__name__})"
    logger.error(message)


def log_lenient_numeric(
    filter_name: str, key: str, rendered: str, first_occurrence: bool = True
) -> None:
    """
    Log a numeric criterion evaluated as a non-match on unusable input.

    Only the first occurrence for a criterion is a WARNING; repeats are
    logged at DEBUG.
    """
    message = (
        f"[{filter_name}] [EVALUATE] {key}: resource value missing or not numeric, "
        f"treating '{rendered}' as non-match"
    )
    if first_occurrence:
        logger.warning(message + " (further occurrences logged at DEBUG)")
    else:
        logger.debug(message)



def log_debug_criteria(filter_name: str, criteria: List[str]) -> None:
    """Log the rendered criteria of a filter at DEBUG level."""
    if not criteria:
        logger.debug(f"[{filter_name}] [DEBUG] No criteria registered")
        return
    logger.debug(f"[{filter_name}] [DEBUG] Criteria: {'; '.join(criteria)}")
