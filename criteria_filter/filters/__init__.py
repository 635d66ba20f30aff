"""Resource filtering modules.

- CriteriaFilter: flat per-property criteria, all of which must pass
- Literal, Not, And, Or, Comparison: boolean combinators over any filter

Every filter implements ResourceFilter.matches() for a single resource and
ResourceFilter.filter_resources() for a batch.
"""

from criteria_filter.filters.base import ResourceFilter
from criteria_filter.filters.criteria import CriteriaFilter
from criteria_filter.filters.expression import And, Comparison, Literal, Not, Or
from criteria_filter.filters.operators import (
    OPERATOR_EVALUATORS,
    CriterionEvaluationError,
    evaluate_criterion,
)

__all__ = [
    "ResourceFilter",
    "CriteriaFilter",
    "And",
    "Comparison",
    "Literal",
    "Not",
    "Or",
    "OPERATOR_EVALUATORS",
    "CriterionEvaluationError",
    "evaluate_criterion",
]
