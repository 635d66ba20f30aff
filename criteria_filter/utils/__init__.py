"""Utility modules for configuration and logging."""

from criteria_filter.utils.config import ConfigurationError, FilterConfig, configure_logging
from criteria_filter.utils.logging import (
    ActionType,
    FilterLogger,
    LogEntry,
    LogLevel,
    log_debug_criteria,
    log_evaluation_error,
    log_lenient_numeric,
    log_match_result,
)

__all__ = [
    "ConfigurationError",
    "FilterConfig",
    "configure_logging",
    "ActionType",
    "FilterLogger",
    "LogEntry",
    "LogLevel",
    "log_debug_criteria",
    "log_evaluation_error",
    "log_lenient_numeric",
    "log_match_result",
]
