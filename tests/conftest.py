"""Pytest configuration and shared fixtures."""

from typing import Dict

import pytest

from criteria_filter.filters.criteria import CriteriaFilter
from criteria_filter.models import ComparisonOperator

FILTER_ENV_VARS = ["ALLOW_MISSING_FIELDS", "STRICT_NUMERIC_VALUES", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_filter_environment(monkeypatch):
    """Keep host environment variables out of configuration tests."""
    for var in FILTER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_resource() -> Dict[str, str]:
    """Resource from the motivating example."""
    return {
        "firstname": "Joe",
        "surname": "Bloggs",
        "role": "administrator",
        "age": "35",
    }


@pytest.fixture
def empty_filter() -> CriteriaFilter:
    """Filter with default policy and no criteria."""
    return CriteriaFilter(name="test")


@pytest.fixture
def admin_over_30_filter() -> CriteriaFilter:
    """Filter for administrators older than 30."""
    criteria_filter = CriteriaFilter(name="admins")
    criteria_filter.add_criterion("role", ComparisonOperator.EQUALS, "administrator")
    criteria_filter.add_criterion("age", ComparisonOperator.GREATER_THAN, "30")
    return criteria_filter
