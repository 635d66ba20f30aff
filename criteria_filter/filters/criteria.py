"""Criteria filter: per-property criteria evaluated conjunctively.

A CriteriaFilter holds criteria grouped by property key. A resource matches
when every criterion registered under every key passes against the
resource's value for that key. A filter with no criteria matches nothing.

Registration and evaluation fail differently:
- Registration: a greater/less than criterion whose comparison value is not
  a number is discarded. add_criterion() reports this through its
  RegistrationResult and never raises.
- Evaluation: a missing or non-numeric resource value for a greater/less
  than criterion, or an invalid regular expression, raises
  CriterionEvaluationError out of matches().
"""

from criteria_filter.filters.base import ResourceFilter
from criteria_filter.filters.operators import (
    CriterionEvaluationError,
    evaluate_criterion,
    parse_float,
)
from criteria_filter.models import ComparisonOperator, Criterion, RegistrationResult, Resource
from criteria_filter.utils.config import FilterConfig
from criteria_filter.utils.logging import (
    FilterLogger,
    log_debug_criteria,
    log_evaluation_error,
    log_lenient_numeric,
    log_match_result,
)


class CriteriaFilter(ResourceFilter):
    """Filter resources by a flat set of per-property criteria.

    Criteria are added with add_criterion() and read left to right, e.g.
    ``add_criterion("age", ComparisonOperator.GREATER_THAN, "30")`` selects
    resources whose age is greater than 30. Several criteria may share a key,
    such as age greater than 25 and age less than 35.

    The inclusion policy (allow_missing_fields) only decides the result of a
    MATCHES_REGEX criterion for a resource that lacks the property. EQUALS
    never matches a missing property and EXISTS states presence explicitly.
    """

    def __init__(
        self,
        allow_missing_fields: bool = True,
        strict_numeric_values: bool = True,
        name: str = "filter",
        filter_logger: FilterLogger | None = None,
    ):
        """
        Initialize an empty criteria filter.

        Args:
            allow_missing_fields: Inclusion policy, see allow_omitted_fields()
            strict_numeric_values: If False, greater/less than criteria evaluate
                                   as a non-match instead of raising when the
                                   resource value is missing or not numeric
            name: Name used in log output
            filter_logger: Optional structured logger; one is created if omitted
        """
        self.allow_missing_fields = allow_missing_fields
        self.strict_numeric_values = strict_numeric_values
        self.name = name
        self.filter_logger = filter_logger or FilterLogger(filter_name=name)
        self._criteria_by_key: dict[str, list[Criterion]] = {}
        self._lenient_criteria: set[Criterion] = set()

    @classmethod
    def from_config(cls, config: FilterConfig, name: str = "filter") -> "CriteriaFilter":
        """Create an empty filter carrying the policy flags of a FilterConfig."""
        return cls(
            allow_missing_fields=config.allow_missing_fields,
            strict_numeric_values=config.strict_numeric_values,
            name=name,
        )

    @property
    def criteria_by_key(self) -> dict[str, list[Criterion]]:
        """Copy of the registered criteria grouped by property key."""
        return {key: list(criteria) for key, criteria in self._criteria_by_key.items()}

    @property
    def criteria(self) -> tuple[Criterion, ...]:
        """All registered criteria, grouped by key in registration order."""
        return tuple(
            criterion for criteria in self._criteria_by_key.values() for criterion in criteria
        )

    def reset(self) -> None:
        """Remove all criteria. The inclusion policy is left unchanged."""
        discarded = len(self.criteria)
        self._criteria_by_key = {}
        self._lenient_criteria.clear()
        self.filter_logger.log_reset(discarded)

    def allow_omitted_fields(self, allow: bool) -> None:
        """
        Set the inclusion policy.

        Args:
            allow: True for inclusive filtering, where a MATCHES_REGEX criterion
                   passes when the resource lacks the property. False for
                   exclusive filtering, where it fails.
        """
        self.allow_missing_fields = allow
        self.filter_logger.log_policy_changed(allow)

    def add_criterion(
        self,
        key: str,
        operator: ComparisonOperator | str,
        value: str,
    ) -> RegistrationResult:
        """
        Add a criterion to the filter.

        EXISTS takes "true" to require the property and "false" to require its
        absence. GREATER_THAN and LESS_THAN only accept values that parse as
        floats; any other value is discarded without raising.

        Args:
            key: Property name to test, matched case-sensitively
            operator: A ComparisonOperator or its member name
            value: Value to compare the resource's property against

        Returns:
            RegistrationResult with added=False and an error message when the
            criterion was discarded

        Raises:
            ValueError: If operator does not name a ComparisonOperator
        """
        operator = ComparisonOperator.from_name(operator)

        value_as_float = None
        if operator.is_numeric:
            try:
                value_as_float = parse_float(value)
            except (TypeError, ValueError):
                reason = f"'{value}' is not a number, {operator.name} requires a numeric value"
                self.filter_logger.log_criterion_discarded(key, operator.name, reason)
                return RegistrationResult(added=False, errors=[reason])

        criterion = Criterion(
            key=key,
            operator=operator,
            comparison_value=value,
            comparison_value_as_float=value_as_float,
        )
        criteria_for_key = self._criteria_by_key.setdefault(key, [])
        criteria_for_key.append(criterion)

        self.filter_logger.log_criterion_added(key, str(criterion), len(criteria_for_key))
        return RegistrationResult(added=True, criterion=criterion)

    def get_criteria_as_strings(self) -> list[str]:
        """Render every registered criterion, e.g. "age is greater than 30.0"."""
        return [str(criterion) for criterion in self.criteria]

    def matches(self, resource: Resource) -> bool:
        """
        Check a resource against every registered criterion.

        Args:
            resource: Mapping of property name to value; not modified

        Returns:
            True if all criteria pass, False if any fails or none are registered

        Raises:
            CriterionEvaluationError: If a greater/less than criterion meets a
                missing or non-numeric value (unless strict_numeric_values is
                False), or a regular expression is invalid
        """
        if not self._criteria_by_key:
            log_match_result(self.name, False, reason="no criteria registered")
            return False

        for key, criteria in self._criteria_by_key.items():
            value = resource.get(key)
            for criterion in criteria:
                if not self._evaluate(value, criterion):
                    log_match_result(self.name, False, failed_key=key, reason=str(criterion))
                    return False

        log_match_result(self.name, True)
        return True

    def _evaluate(self, value: str | None, criterion: Criterion) -> bool:
        try:
            return evaluate_criterion(value, criterion, self.allow_missing_fields)
        except CriterionEvaluationError as e:
            if criterion.operator.is_numeric and not self.strict_numeric_values:
                first_occurrence = criterion not in self._lenient_criteria
                self._lenient_criteria.add(criterion)
                log_lenient_numeric(self.name, criterion.key, str(criterion), first_occurrence)
                return False
            log_evaluation_error(self.name, criterion.key, str(criterion), e)
            raise

    def log_criteria(self) -> None:
        """Write the rendered criteria to the debug log."""
        log_debug_criteria(self.name, self.get_criteria_as_strings())

    def __repr__(self) -> str:
        return (
            f"CriteriaFilter(name={self.name!r}, "
            f"allow_missing_fields={self.allow_missing_fields}, "
            f"criteria={self.get_criteria_as_strings()!r})"
        )
