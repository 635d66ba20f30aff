"""Boolean combinators over resource filters.

This layer sits on top of CriteriaFilter rather than inside it. Every node
is itself a ResourceFilter, so a CriteriaFilter can be a leaf next to
single Comparison nodes:

    admins = CriteriaFilter()
    admins.add_criterion("role", ComparisonOperator.EQUALS, "administrator")
    expr = admins | (Comparison("age", "GREATER_THAN", "30") & ~Comparison("locked", "EXISTS", "true"))
"""

from criteria_filter.filters.base import ResourceFilter
from criteria_filter.filters.operators import evaluate_criterion, parse_float
from criteria_filter.models import ComparisonOperator, Criterion, Resource


class Literal(ResourceFilter):
    """Constant result, regardless of the resource."""

    def __init__(self, value: bool):
        self.value = value

    def matches(self, resource: Resource) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"Literal({self.value})"


class Not(ResourceFilter):
    def __init__(self, inner: ResourceFilter):
        self.inner = inner

    def matches(self, resource: Resource) -> bool:
        return not self.inner.matches(resource)

    def __repr__(self) -> str:
        return f"Not({self.inner!r})"


class And(ResourceFilter):
    """Matches when every child matches. No children matches everything."""

    def __init__(self, *children: ResourceFilter):
        self.children = children

    def matches(self, resource: Resource) -> bool:
        return all(child.matches(resource) for child in self.children)

    def __repr__(self) -> str:
        return f"And({', '.join(repr(child) for child in self.children)})"


class Or(ResourceFilter):
    """Matches when any child matches. No children matches nothing."""

    def __init__(self, *children: ResourceFilter):
        self.children = children

    def matches(self, resource: Resource) -> bool:
        return any(child.matches(resource) for child in self.children)

    def __repr__(self) -> str:
        return f"Or({', '.join(repr(child) for child in self.children)})"


class Comparison(ResourceFilter):
    """A single criterion as an expression leaf.

    Unlike CriteriaFilter.add_criterion(), a non-numeric value for a
    greater/less than comparison raises ValueError at construction.
    """

    def __init__(
        self,
        key: str,
        operator: ComparisonOperator | str,
        value: str,
        allow_missing_fields: bool = True,
    ):
        operator = ComparisonOperator.from_name(operator)
        value_as_float = parse_float(value) if operator.is_numeric else None
        self.criterion = Criterion(
            key=key,
            operator=operator,
            comparison_value=value,
            comparison_value_as_float=value_as_float,
        )
        self.allow_missing_fields = allow_missing_fields

    def matches(self, resource: Resource) -> bool:
        return evaluate_criterion(
            resource.get(self.criterion.key), self.criterion, self.allow_missing_fields
        )

    def __str__(self) -> str:
        return str(self.criterion)

    def __repr__(self) -> str:
        return f"Comparison({str(self.criterion)!r})"
