"""Criteria Filter - match resource property maps against user-defined criteria."""

__version__ = "1.0.0"

from criteria_filter.filters import (
    And,
    Comparison,
    CriteriaFilter,
    CriterionEvaluationError,
    Literal,
    Not,
    Or,
    ResourceFilter,
)
from criteria_filter.models import (
    ComparisonOperator,
    Criterion,
    RegistrationResult,
    Resource,
)
from criteria_filter.utils.config import ConfigurationError, FilterConfig

__all__ = [
    "And",
    "Comparison",
    "ComparisonOperator",
    "ConfigurationError",
    "CriteriaFilter",
    "Criterion",
    "CriterionEvaluationError",
    "FilterConfig",
    "Literal",
    "Not",
    "Or",
    "RegistrationResult",
    "Resource",
    "ResourceFilter",
]
