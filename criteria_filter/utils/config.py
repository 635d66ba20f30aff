"""Configuration management for the criteria filter.

Filters can be configured from environment variables so that a host
application picks policy up from its deployment rather than from code.

Key configuration options:
- ALLOW_MISSING_FIELDS: Result of a regular expression criterion when the
  resource lacks the property (default: true)
- STRICT_NUMERIC_VALUES: Raise on missing or non-numeric resource values for
  greater/less than criteria instead of treating them as a non-match
  (default: true)
- LOG_LEVEL: Configurable log level
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")

PACKAGE_LOGGER_NAME = "criteria_filter"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Module logger for configuration warnings
_config_logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised for configuration validation errors."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


def _parse_flag(name: str, default: bool, errors: List[str]) -> bool:
    """Parse a boolean environment variable, collecting unrecognised values."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.lower().strip()
    if value in TRUE_VALUES:
        return True
    if value not in FALSE_VALUES:
        errors.append(f"Invalid {name}: '{raw}' is not a boolean")
    return False


@dataclass
class FilterConfig:
    """Configuration for criteria filters.

    Attributes:
        allow_missing_fields: Inclusion policy. When True a regular expression
            criterion passes for resources that lack the property.
        strict_numeric_values: When True, a greater/less than criterion
            raises CriterionEvaluationError on a missing or non-numeric
            resource value. When False the criterion evaluates as a non-match.
        log_level: Log level for output.
    """

    allow_missing_fields: bool = True
    strict_numeric_values: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, validate: bool = True) -> "FilterConfig":
        """Create configuration from environment variables.

        Args:
            validate: If True, raises ConfigurationError when a variable
                holds a value that cannot be used.

        Returns:
            FilterConfig instance populated from environment variables.

        Raises:
            ConfigurationError: If validation is enabled and configuration is invalid.
        """
        config = cls()
        errors: List[str] = []

        config.allow_missing_fields = _parse_flag("ALLOW_MISSING_FIELDS", True, errors)
        config.strict_numeric_values = _parse_flag("STRICT_NUMERIC_VALUES", True, errors)

        log_level_value = os.environ.get("LOG_LEVEL", "INFO").upper().strip()
        if log_level_value in VALID_LOG_LEVELS:
            config.log_level = log_level_value
        else:
            _config_logger.warning(f"Invalid LOG_LEVEL '{log_level_value}', defaulting to INFO")
            config.log_level = "INFO"

        if validate:
            errors.extend(config.validate())
            if errors:
                raise ConfigurationError(
                    f"Configuration validation failed: {errors}", errors=errors
                )
        elif errors:
            for error in errors:
                _config_logger.warning(error)

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of {', '.join(sorted(VALID_LOG_LEVELS))}"
            )

        if not isinstance(self.allow_missing_fields, bool):
            errors.append("ALLOW_MISSING_FIELDS must be a boolean")

        if not isinstance(self.strict_numeric_values, bool):
            errors.append("STRICT_NUMERIC_VALUES must be a boolean")

        return errors

    def get_numeric_log_level(self) -> int:
        """Get the numeric log level for use with logging module."""
        return getattr(logging, self.log_level, logging.INFO)


def configure_logging(config: Optional["FilterConfig"] = None) -> logging.Logger:
    """Configure the criteria_filter package logger.

    Only the package logger is touched, so a host application's root logger
    and handlers stay as they are. Repeated calls update the level and reuse
    the handler installed by the first call.

    Args:
        config: Optional FilterConfig instance. If not provided, one is read
            from the environment without validation, so unusable values
            fall back to their defaults with a warning.

    Returns:
        Configured logger for the criteria_filter package.
    """
    if config is None:
        config = FilterConfig.from_environment(validate=False)

    log_level = config.get_numeric_log_level()
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(log_level)

    handler = next(
        (h for h in package_logger.handlers if h.get_name() == PACKAGE_LOGGER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(PACKAGE_LOGGER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    handler.setLevel(log_level)

    return package_logger
