"""Base filter interface for resource filtering."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from criteria_filter.models import Resource


class ResourceFilter(ABC):
    """Abstract base class for resource filters.

    Filters combine with ``&``, ``|`` and ``~`` into And, Or and Not
    expressions.
    """

    @abstractmethod
    def matches(self, resource: Resource) -> bool:
        """Check whether a single resource satisfies the filter."""
        raise NotImplementedError

    def filter_resources(self, resources: Iterable[Resource]) -> list[Resource]:
        """Return the resources that satisfy the filter, in input order."""
        return [resource for resource in resources if self.matches(resource)]

    def __and__(self, other: "ResourceFilter") -> "ResourceFilter":
        from criteria_filter.filters.expression import And

        return And(self, other)

    def __or__(self, other: "ResourceFilter") -> "ResourceFilter":
        from criteria_filter.filters.expression import Or

        return Or(self, other)

    def __invert__(self) -> "ResourceFilter":
        from criteria_filter.filters.expression import Not

        return Not(self)
