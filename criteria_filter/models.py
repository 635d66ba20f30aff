"""Data models for the criteria filter."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

# A resource is any caller-owned mapping of property name to property value
Resource = Mapping[str, str]


class ComparisonOperator(Enum):
    """Comparison operators, valued by the phrase used when rendering."""

    EXISTS = "exists"
    GREATER_THAN = "is greater than"
    LESS_THAN = "is less than"
    EQUALS = "is equal to"
    MATCHES_REGEX = "matches the regular expression"

    @property
    def is_numeric(self) -> bool:
        """Whether the operator compares parsed float values."""
        return self in (ComparisonOperator.GREATER_THAN, ComparisonOperator.LESS_THAN)

    @classmethod
    def from_name(cls, name: "str | ComparisonOperator") -> "ComparisonOperator":
        """
        Resolve an operator from a member or its name.

        Args:
            name: A ComparisonOperator, or a member name such as "EQUALS"
                  (case-insensitive, surrounding whitespace ignored)

        Returns:
            The matching ComparisonOperator

        Raises:
            ValueError: If the name does not identify an operator
        """
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown comparison operator '{name}' (expected one of: {valid})")


@dataclass(frozen=True)
class Criterion:
    """A single property comparison.

    No validation happens here. Numeric operators get their float value
    from the filter that registers them.
    """

    key: str
    operator: ComparisonOperator
    comparison_value: str
    comparison_value_as_float: float | None = None

    def rendered_value(self) -> str:
        """Return the comparison value as shown in the rendering."""
        if self.operator.is_numeric and self.comparison_value_as_float is not None:
            return repr(self.comparison_value_as_float)
        return self.comparison_value

    def __str__(self) -> str:
        return f"{self.key} {self.operator.value} {self.rendered_value()}"


@dataclass
class RegistrationResult:
    """Outcome of registering a criterion with a filter."""

    added: bool
    criterion: Criterion | None = None
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.added
