"""Tests for travel behavior summaries and fuel estimates."""
import datetime as dt

import pytest

from toll_analytics.analytics.travel import fuel_estimate, travel_summary, weekday_counts, weeks_in_period
from toll_analytics.data.schemas import PeriodFilter, PeriodType

from conftest import make_record


class TestWeeksInPeriod:

    def test_month_uses_calendar_span(self):
        p = PeriodFilter(PeriodType.MONTH, anchor=dt.date(2024, 1, 10))
        records = [make_record(100, dt.datetime(2024, 1, 10))]
        assert weeks_in_period(records, p) == pytest.approx(31 / 7)

    def test_year_ignores_data_span(self):
        p = PeriodFilter(PeriodType.YEAR, anchor=dt.date(2023, 1, 1))
        assert weeks_in_period([], p) == pytest.approx(365 / 7)

    def test_short_custom_range_floored(self):
        p = PeriodFilter(PeriodType.CUSTOM, start_date=dt.date(2024, 1, 1), end_date=dt.date(2024, 1, 1))
        assert weeks_in_period([], p) == 0.5

    def test_all_uses_data_span(self):
        records = [
            make_record(100, dt.datetime(2024, 1, 1)),
            make_record(100, dt.datetime(2024, 1, 22)),
        ]
        assert weeks_in_period(records, PeriodFilter(PeriodType.ALL)) == pytest.approx(3.0)

    def test_all_short_span_floored(self):
        records = [
            make_record(100, dt.datetime(2024, 1, 1, 8)),
            make_record(100, dt.datetime(2024, 1, 1, 9)),
        ]
        assert weeks_in_period(records, None) == 0.5

    def test_all_with_fewer_than_two_dated_is_one_week(self):
        records = [make_record(100, dt.datetime(2024, 1, 1)), make_record(100, None)]
        assert weeks_in_period(records, None) == 1.0
        assert weeks_in_period([], None) == 1.0


class TestTravelSummary:

    def test_scenario_all_time(self, scenario_records):
        summary = travel_summary(scenario_records, PeriodFilter(PeriodType.ALL))
        assert summary.total_trips == 3
        assert summary.weeks_in_period == 0.5
        assert summary.avg_weekly_trips == pytest.approx(6.0)
        assert summary.top_location_names == ["A", "B"]

    def test_weekday_counts_sunday_first(self, scenario_records):
        # 2024-01-01 was a Monday, 2024-01-03 a Wednesday
        counts = travel_summary(scenario_records).weekday_counts
        assert list(counts) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert counts["Mon"] == 2
        assert counts["Wed"] == 1
        assert counts["Sun"] == 0

    def test_busiest_weekday(self, scenario_records):
        assert travel_summary(scenario_records).busiest_weekday == "Mon"

    def test_weekday_counts_absent_without_dates(self):
        summary = travel_summary([make_record(100, None)])
        assert summary.weekday_counts is None
        assert summary.busiest_weekday is None
        assert weekday_counts([]) is None

    def test_top_five_locations(self):
        records = [make_record(100 * i, None, location=f"L{i}") for i in range(1, 9)]
        assert travel_summary(records).top_location_names == ["L8", "L7", "L6", "L5", "L4"]

    def test_empty(self):
        summary = travel_summary([], PeriodFilter(PeriodType.MONTH, anchor=dt.date(2024, 2, 1)))
        assert summary.total_trips == 0
        assert summary.avg_weekly_trips == 0
        assert summary.top_location_names == []
        assert summary.weeks_in_period == pytest.approx(29 / 7)


class TestFuelEstimate:

    def test_basic(self):
        est = fuel_estimate(10, 2.0, "12", "30", "3.60")
        assert est.total_miles == pytest.approx(120)
        assert est.gallons == pytest.approx(4)
        assert est.cost == pytest.approx(14.4)
        assert est.weekly_cost == pytest.approx(7.2)

    def test_free_fuel_allowed(self):
        assert fuel_estimate(10, 1.0, 5, 25, 0).cost == 0

    @pytest.mark.parametrize("miles, mpg, price", [
        ("", 30, 3),
        (0, 30, 3),
        (10, 0, 3),
        (10, 30, -1),
        ("ten", 30, 3),
        (10, None, 3),
        (10, 30, "nan"),
    ])
    def test_invalid_inputs_give_none(self, miles, mpg, price):
        assert fuel_estimate(10, 1.0, miles, mpg, price) is None

    def test_zero_weeks(self):
        assert fuel_estimate(10, 0, 10, 20, 3).weekly_cost == 0.0
