"""Per-operator evaluation of a single criterion.

Each ComparisonOperator has exactly one evaluation function in
OPERATOR_EVALUATORS. Adding an operator means adding an enum member and
an entry here; a missing entry fails at import time.

Missing resource values are handled per operator:
- EQUALS never matches a missing value
- EXISTS encodes presence or absence in its own comparison value
- MATCHES_REGEX defers to the filter's inclusion policy
- GREATER_THAN and LESS_THAN raise CriterionEvaluationError
"""

import math
import re
from collections.abc import Callable

from criteria_filter.models import ComparisonOperator, Criterion


class CriterionEvaluationError(ValueError):
    """Raised when a criterion cannot be evaluated against a resource value."""

    def __init__(self, criterion: Criterion, message: str):
        self.criterion = criterion
        self.message = message
        super().__init__(f"Cannot evaluate '{criterion}': {message}")


Evaluator = Callable[[str | None, Criterion, bool], bool]


def parse_float(value: str) -> float:
    """
    Parse a comparison value the way numeric criteria expect.

    Decimal and exponent forms with optional surrounding whitespace are
    accepted, as are "Infinity" and "-Infinity". Digit separators ("1_000"),
    NaN and other spellings of infinity ("inf") are rejected.

    Raises:
        ValueError: If the value is not a usable floating-point number
    """
    text = value.strip()
    if "_" in text:
        raise ValueError(f"could not convert string to float: {value!r}")
    result = float(text)
    if math.isnan(result):
        raise ValueError(f"NaN is not a comparable number: {value!r}")
    unsigned = text.lstrip("+-")
    if unsigned[:1].isalpha() and unsigned != "Infinity":
        raise ValueError(f"could not convert string to float: {value!r}")
    return result


def parse_boolean(value: str) -> bool:
    """Parse an EXISTS comparison value; anything other than "true" is False."""
    return value.lower() == "true"


def _evaluate_equals(value: str | None, criterion: Criterion, allow_missing_fields: bool) -> bool:
    return value is not None and value == criterion.comparison_value


def _evaluate_exists(value: str | None, criterion: Criterion, allow_missing_fields: bool) -> bool:
    expected = parse_boolean(criterion.comparison_value)
    return (value is not None) == expected


def _resource_float(value: str | None, criterion: Criterion) -> float:
    if value is None:
        raise CriterionEvaluationError(criterion, "resource has no value for this property")
    try:
        return parse_float(value)
    except ValueError as e:
        raise CriterionEvaluationError(criterion, "resource value is not numeric") from e


def _threshold(criterion: Criterion) -> float:
    if criterion.comparison_value_as_float is not None:
        return criterion.comparison_value_as_float
    # Criterion built outside a filter
    try:
        return parse_float(criterion.comparison_value)
    except ValueError as e:
        raise CriterionEvaluationError(criterion, "comparison value is not numeric") from e


def _evaluate_greater_than(
    value: str | None, criterion: Criterion, allow_missing_fields: bool
) -> bool:
    return _resource_float(value, criterion) > _threshold(criterion)


def _evaluate_less_than(value: str | None, criterion: Criterion, allow_missing_fields: bool) -> bool:
    return _resource_float(value, criterion) < _threshold(criterion)


def _evaluate_matches_regex(
    value: str | None, criterion: Criterion, allow_missing_fields: bool
) -> bool:
    if value is None:
        return allow_missing_fields
    try:
        pattern = re.compile(criterion.comparison_value)
    except re.error as e:
        raise CriterionEvaluationError(criterion, f"invalid regular expression: {e}") from e
    return pattern.fullmatch(value) is not None


OPERATOR_EVALUATORS: dict[ComparisonOperator, Evaluator] = {
    ComparisonOperator.EQUALS: _evaluate_equals,
    ComparisonOperator.EXISTS: _evaluate_exists,
    ComparisonOperator.GREATER_THAN: _evaluate_greater_than,
    ComparisonOperator.LESS_THAN: _evaluate_less_than,
    ComparisonOperator.MATCHES_REGEX: _evaluate_matches_regex,
}

_unhandled = set(ComparisonOperator) - set(OPERATOR_EVALUATORS)
if _unhandled:
    raise RuntimeError(f"No evaluator for operators: {sorted(op.name for op in _unhandled)}")


def evaluate_criterion(
    value: str | None, criterion: Criterion, allow_missing_fields: bool = True
) -> bool:
    """
    Evaluate one criterion against a resource value.

    Args:
        value: The resource's value for criterion.key, or None if absent
        criterion: The criterion to evaluate
        allow_missing_fields: Inclusion policy, consulted by MATCHES_REGEX
                              when the value is missing

    Returns:
        True if the value satisfies the criterion

    Raises:
        CriterionEvaluationError: For numeric operators on a missing or
            non-numeric value, or for an invalid regular expression
    """
    return OPERATOR_EVALUATORS[criterion.operator](value, criterion, allow_missing_fields)
