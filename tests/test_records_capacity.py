"""Tests for record coercion and date resolution."""

import math

import pytest

from utils_capacity_planning.records_capacity import (
    ResourceSample,
    parse_number,
    resolve_date,
    round_half_up,
    to_number,
)


class TestParseNumber:
    """Leading-number parsing with parse-or-zero fallback."""

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42.0),
        (" 3.5 ", 3.5),
        ("12abc", 12.0),
        ("-7", -7.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("5e", 5.0),
        (17, 17.0),
    ])
    def test_numeric_prefixes(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "n/a", None, "  ", "-"])
    def test_unparsable_values_are_none(self, raw):
        assert parse_number(raw) is None

    def test_infinity(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    def test_nan_float_is_none(self):
        assert parse_number(float("nan")) is None

    def test_to_number_substitutes_zero(self):
        assert to_number("oops") == 0.0
        assert to_number(None) == 0.0
        assert to_number("81.5") == 81.5


class TestResolveDate:
    """`date` first, then `dates`; first non-empty wins."""

    def test_date_column(self):
        assert resolve_date({"date": "2024-01-01"}) == "2024-01-01"

    def test_dates_fallback(self):
        assert resolve_date({"dates": "2024-01-02"}) == "2024-01-02"

    def test_empty_date_falls_back(self):
        assert resolve_date({"date": "  ", "dates": "2024-01-03"}) == "2024-01-03"

    def test_date_wins_over_dates(self):
        assert resolve_date({"date": "2024-01-01", "dates": "2024-02-02"}) == "2024-01-01"

    def test_missing(self):
        assert resolve_date({"cpu_usage": "5"}) is None


class TestResourceSample:
    """Structured record built from a raw row."""

    def test_from_row_keeps_unknown_fields(self):
        sample = ResourceSample.from_row({"date": "2024-01-01", "cpu_usage": "55", "host": "db-1"})
        assert sample.date == "2024-01-01"
        assert sample.cpu_usage == 55.0
        assert sample.memory_usage is None
        assert sample.fields["host"] == "db-1"

    def test_value_zero_substitutes(self):
        sample = ResourceSample.from_row({"cpu_usage": "bad"})
        assert sample.value("cpu_usage") == 0.0
        assert sample.value("power_consumption") == 0.0

    def test_value_rejects_unknown_metric(self):
        with pytest.raises(KeyError):
            ResourceSample().value("disk_usage")


class TestRoundHalfUp:
    """Rounding matches Math.round(x * 100) / 100."""

    def test_half_rounds_up(self):
        assert round_half_up(0.125) == 0.13

    def test_plain_rounding(self):
        assert round_half_up(33.3333) == 33.33

    def test_zero_digits(self):
        assert round_half_up(2.5, 0) == 3.0

    def test_non_finite_pass_through(self):
        assert round_half_up(float("inf")) == float("inf")
        assert round_half_up(float("-inf"), 0) == float("-inf")
        assert math.isnan(round_half_up(float("nan")))
