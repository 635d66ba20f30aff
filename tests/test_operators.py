"""Tests for per-operator criterion evaluation."""

import re

import pytest

from criteria_filter.filters.operators import (
    OPERATOR_EVALUATORS,
    CriterionEvaluationError,
    evaluate_criterion,
    parse_boolean,
    parse_float,
)
from criteria_filter.models import ComparisonOperator, Criterion


def numeric(key: str, operator: ComparisonOperator, value: str) -> Criterion:
    """Build a numeric criterion the way a filter registers it."""
    return Criterion(key, operator, value, float(value))


class TestDispatchTable:
    """Tests for OPERATOR_EVALUATORS."""

    def test_every_operator_has_evaluator(self):
        """Test the dispatch table covers the whole enum."""
        assert set(OPERATOR_EVALUATORS) == set(ComparisonOperator)


class TestEquals:
    """Tests for EQUALS."""

    def test_equal_value(self):
        criterion = Criterion("role", ComparisonOperator.EQUALS, "administrator")
        assert evaluate_criterion("administrator", criterion) is True

    def test_case_sensitive(self):
        criterion = Criterion("role", ComparisonOperator.EQUALS, "administrator")
        assert evaluate_criterion("Administrator", criterion) is False

    @pytest.mark.parametrize("allow_missing", [True, False])
    def test_missing_value_never_matches(self, allow_missing):
        """Test EQUALS ignores the inclusion policy for missing values."""
        criterion = Criterion("role", ComparisonOperator.EQUALS, "administrator")
        assert evaluate_criterion(None, criterion, allow_missing) is False


class TestExists:
    """Tests for EXISTS."""

    @pytest.mark.parametrize(
        "expected,value,result",
        [
            ("true", "anything", True),
            ("true", "", True),
            ("true", None, False),
            ("false", "anything", False),
            ("false", None, True),
            ("TRUE", "x", True),
            ("False", None, True),
        ],
    )
    def test_presence_truth_table(self, expected, value, result):
        criterion = Criterion("surname", ComparisonOperator.EXISTS, expected)
        assert evaluate_criterion(value, criterion) is result

    def test_unrecognised_flag_means_absent(self):
        """Test values other than "true" expect the property to be absent."""
        criterion = Criterion("surname", ComparisonOperator.EXISTS, "yes")
        assert evaluate_criterion(None, criterion) is True
        assert evaluate_criterion("Bloggs", criterion) is False

    def test_parse_boolean(self):
        assert parse_boolean("true") is True
        assert parse_boolean("TrUe") is True
        assert parse_boolean("false") is False
        assert parse_boolean("1") is False


class TestParseFloat:
    """Tests for numeric value parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("30", 30.0),
            (" -2.5 ", -2.5),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("Infinity", float("inf")),
            ("-Infinity", float("-inf")),
            ("1e999", float("inf")),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_float(value) == expected

    @pytest.mark.parametrize(
        "value", ["1_000", "1__0", "nan", "NaN", "-nan", "inf", "-inf", "infinity", "", "abc"]
    )
    def test_rejected_forms(self, value):
        with pytest.raises(ValueError):
            parse_float(value)

    def test_nan_threshold_when_not_preset_raises(self):
        criterion = Criterion("age", ComparisonOperator.LESS_THAN, "NaN")
        with pytest.raises(CriterionEvaluationError) as exc_info:
            evaluate_criterion("31", criterion)

        assert "comparison value is not numeric" in exc_info.value.message


class TestNumeric:
    """Tests for GREATER_THAN and LESS_THAN."""

    def test_greater_than_is_strict(self):
        criterion = numeric("age", ComparisonOperator.GREATER_THAN, "30")
        assert evaluate_criterion("31", criterion) is True
        assert evaluate_criterion("30", criterion) is False
        assert evaluate_criterion("29.5", criterion) is False

    def test_less_than_is_strict(self):
        criterion = numeric("age", ComparisonOperator.LESS_THAN, "35")
        assert evaluate_criterion("34.99", criterion) is True
        assert evaluate_criterion("35", criterion) is False
        assert evaluate_criterion("40", criterion) is False

    def test_missing_value_raises(self):
        criterion = numeric("age", ComparisonOperator.GREATER_THAN, "30")
        with pytest.raises(CriterionEvaluationError) as exc_info:
            evaluate_criterion(None, criterion)

        assert exc_info.value.criterion is criterion
        assert "no value" in exc_info.value.message

    def test_non_numeric_value_raises_chained(self):
        criterion = numeric("age", ComparisonOperator.LESS_THAN, "30")
        with pytest.raises(CriterionEvaluationError) as exc_info:
            evaluate_criterion("thirty", criterion)

        assert isinstance(exc_info.value.__cause__, ValueError)
        # Resource values stay out of error messages
        assert "thirty" not in str(exc_info.value)

    def test_evaluation_error_is_value_error(self):
        criterion = numeric("age", ComparisonOperator.GREATER_THAN, "30")
        with pytest.raises(ValueError):
            evaluate_criterion("abc", criterion)

    def test_threshold_parsed_when_not_preset(self):
        """Test a criterion built without a float still evaluates."""
        criterion = Criterion("age", ComparisonOperator.GREATER_THAN, "30")
        assert evaluate_criterion("31", criterion) is True

    def test_bad_threshold_when_not_preset_raises(self):
        criterion = Criterion("age", ComparisonOperator.GREATER_THAN, "abc")
        with pytest.raises(CriterionEvaluationError):
            evaluate_criterion("31", criterion)


class TestMatchesRegex:
    """Tests for MATCHES_REGEX."""

    def test_full_match_required(self):
        """Test the whole value must match, not a substring."""
        criterion = Criterion("firstname", ComparisonOperator.MATCHES_REGEX, "Jo")
        assert evaluate_criterion("Jo", criterion) is True
        assert evaluate_criterion("Joe", criterion) is False

    def test_pattern_match(self):
        criterion = Criterion("firstname", ComparisonOperator.MATCHES_REGEX, "J[a-z]+")
        assert evaluate_criterion("Joe", criterion) is True
        assert evaluate_criterion("joe", criterion) is False

    @pytest.mark.parametrize("allow_missing", [True, False])
    def test_missing_value_follows_policy(self, allow_missing):
        criterion = Criterion("firstname", ComparisonOperator.MATCHES_REGEX, "(")
        # The pattern is never compiled for a missing value
        assert evaluate_criterion(None, criterion, allow_missing) is allow_missing

    def test_invalid_pattern_raises_chained(self):
        criterion = Criterion("firstname", ComparisonOperator.MATCHES_REGEX, "(unclosed")
        with pytest.raises(CriterionEvaluationError) as exc_info:
            evaluate_criterion("Joe", criterion)

        assert isinstance(exc_info.value.__cause__, re.error)
        assert "invalid regular expression" in str(exc_info.value)
