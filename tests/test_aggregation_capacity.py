"""Tests for daily, monthly and summary aggregation."""

import math

import pytest

from utils_capacity_planning.aggregation_capacity import (
    daily_frame,
    daily_input_counts,
    daily_resource_averages,
    input_frequency_stats,
    metric_trend,
    monthly_frame,
    monthly_statistics,
    summary_metrics,
)
from utils_capacity_planning.grouping_capacity import group_by_date
from utils_capacity_planning.records_capacity import ResourceSample


class TestDailyResourceAverages:
    """Per-day means with unit conversion and rounding."""

    def test_units_and_rounding(self, make_samples):
        records = make_samples("2024-01-01", 2, cpu="33.333", memory="50", network="2500000", power="1500")
        day = daily_resource_averages(group_by_date(records))[0]

        assert day.date == "2024-01-01"
        assert day.input_count == 2
        assert day.cpu == 33.33
        assert day.memory == 50.0
        assert day.network == 2.5
        assert day.power == 1.5

    def test_missing_values_count_as_zero(self):
        records = [
            ResourceSample.from_row({"date": "2024-01-01", "cpu_usage": "80"}),
            ResourceSample.from_row({"date": "2024-01-01", "cpu_usage": "n/a"}),
        ]
        day = daily_resource_averages(group_by_date(records))[0]
        assert day.cpu == 40.0
        assert day.memory == 0.0

    def test_sorted_ascending(self, make_samples):
        records = make_samples("2024-01-03", 1) + make_samples("2024-01-01", 1) + make_samples("2024-01-02", 1)
        days = daily_resource_averages(group_by_date(records))
        assert [d.date for d in days] == ["2024-01-01", "2024-01-02", "2024-01-03"]

    def test_empty(self):
        assert daily_resource_averages({}) == []


class TestDailyInputCounts:
    """Inputs per day and the chart header stats."""

    def test_counts(self, make_samples):
        records = make_samples("2024-01-02", 3) + make_samples("2024-01-01", 1)
        counts = daily_input_counts(group_by_date(records))
        assert [(c.date, c.inputs) for c in counts] == [("2024-01-01", 1), ("2024-01-02", 3)]

    def test_frequency_stats(self, make_samples):
        records = make_samples("2024-01-01", 1) + make_samples("2024-01-02", 2)
        avg, peak = input_frequency_stats(daily_input_counts(group_by_date(records)))
        assert avg == 2  # 1.5 rounds up
        assert peak == 2

    def test_frequency_stats_empty(self):
        assert input_frequency_stats([]) == (0, 0)


class TestMonthlyStatistics:
    """Two-stage (day, then month) averaging."""

    def test_mean_of_daily_means(self, make_samples):
        records = make_samples("2024-01-01", 10, cpu="50") + make_samples("2024-01-02", 1, cpu="90")
        (month,) = monthly_statistics(group_by_date(records))

        assert (month.year, month.month) == (2024, 1)
        assert month.cpu == 70.0  # not the row-weighted 54.55
        assert month.days == 2
        assert month.total_inputs == 11

    def test_display_units(self, make_samples):
        records = make_samples("2024-03-01", 1, network="3000000", power="2000") + \
            make_samples("2024-03-02", 1, network="1000000", power="1000")
        (month,) = monthly_statistics(group_by_date(records))
        assert month.network == 2.0
        assert month.power == 1.5

    def test_months_are_separate_and_ordered(self, make_samples):
        records = make_samples("2024-02-01", 1, cpu="20") + make_samples("2024-01-31", 1, cpu="40")
        months = monthly_statistics(group_by_date(records))
        assert [(m.key, m.cpu) for m in months] == [("2024-01", 40.0), ("2024-02", 20.0)]

    def test_unparseable_dates_skipped(self, make_samples):
        records = make_samples("someday", 2) + make_samples("2024-01-01", 1)
        months = monthly_statistics(group_by_date(records))
        assert len(months) == 1
        assert months[0].days == 1

    def test_empty(self):
        assert monthly_statistics({}) == []


class TestSummaryMetrics:
    """Whole-dataset KPIs."""

    def test_daily_inputs_average(self, make_samples):
        records = []
        for day in ("2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"):
            records += make_samples(day, 25)
        summary = summary_metrics(records)

        assert summary.total_records == 100
        assert summary.daily_inputs == 25
        assert summary.start_date == "2024-01-01"
        assert summary.end_date == "2024-01-04"

    def test_dateless_rows_count_toward_totals(self, make_samples):
        records = make_samples("2024-01-01", 2, cpu="30") + make_samples("", 1, cpu="90")
        summary = summary_metrics(records)

        assert summary.total_records == 3
        assert summary.daily_inputs == 3
        assert summary.avg_cpu == pytest.approx(50.0)

    def test_raw_unit_means(self, make_samples):
        summary = summary_metrics(make_samples("2024-01-01", 2, network="2000000", power="1500"))
        assert summary.avg_network == 2_000_000
        assert summary.avg_power == 1500

    def test_empty(self):
        summary = summary_metrics([])
        assert summary.total_records == 0
        assert summary.daily_inputs == 0
        assert summary.avg_cpu == 0
        assert (summary.start_date, summary.end_date) == ("", "")


class TestMetricTrend:
    """Last window versus the window before."""

    def _days(self, make_samples, cpus):
        records = []
        for i, cpu in enumerate(cpus, start=1):
            records += make_samples(f"2024-01-{i:02d}", 1, cpu=str(cpu))
        return daily_resource_averages(group_by_date(records))

    def test_change_pct(self, make_samples):
        trend = metric_trend(self._days(make_samples, [10] * 7 + [20] * 7), "cpu")
        assert trend.previous == 10
        assert trend.current == 20
        assert trend.change_pct == 100.0

    def test_not_enough_days(self, make_samples):
        assert metric_trend(self._days(make_samples, [10] * 13), "cpu") is None

    def test_zero_baseline(self, make_samples):
        assert metric_trend(self._days(make_samples, [0] * 7 + [5] * 7), "cpu") is None


class TestFrames:
    """Chart frames keep the columns the dashboard plots."""

    def test_daily_frame_columns(self, make_samples):
        df = daily_frame(daily_resource_averages(group_by_date(make_samples("2024-01-01", 1))))
        assert list(df.columns) == ["date", "input_count", "cpu", "memory", "network", "power", "day"]
        assert len(df) == 1

    def test_empty_frames(self):
        assert daily_frame([]).empty
        assert monthly_frame([]).empty
        assert "total_inputs" in monthly_frame([]).columns

    def test_monthly_frame_uses_month_key(self, make_samples):
        df = monthly_frame(monthly_statistics(group_by_date(make_samples("2024-05-02", 1))))
        assert df.loc[0, "month"] == "2024-05"


class TestNonFiniteValues:
    """Opposite infinities on one day average to NaN without failing."""

    def _records(self):
        return [
            ResourceSample.from_row({"date": "2024-01-01", "cpu_usage": "Infinity", "memory_usage": "5"}),
            ResourceSample.from_row({"date": "2024-01-01", "cpu_usage": "-Infinity", "memory_usage": "7"}),
        ]

    def test_daily_average_is_nan(self):
        (day,) = daily_resource_averages(group_by_date(self._records()))
        assert math.isnan(day.cpu)
        assert day.memory == 6.0
        assert day.input_count == 2

    def test_monthly_statistics_survive(self):
        (month,) = monthly_statistics(group_by_date(self._records()))
        assert math.isnan(month.cpu)
        assert month.days == 1

    def test_trend_over_infinite_window_is_none(self, make_samples):
        records = []
        for i in range(1, 15):
            cpu = "Infinity" if i > 7 else "10"
            records += make_samples(f"2024-01-{i:02d}", 1, cpu=cpu)
        daily = daily_resource_averages(group_by_date(records))
        assert metric_trend(daily, "cpu") is None
