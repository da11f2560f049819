"""Tests for the daily spending trend."""
import datetime as dt

from toll_analytics.analytics.trend import daily_trend, day_label

from conftest import make_record


def test_scenario_two_days(scenario_records):
    trend = daily_trend(scenario_records)
    assert [(p.day, p.total, p.count) for p in trend] == [
        (dt.date(2024, 1, 1), 500, 2),
        (dt.date(2024, 1, 3), 200, 1),
    ]
    assert trend[0].label == "Jan 1"


def test_days_strictly_increasing_from_unsorted_input():
    records = [
        make_record(100, dt.datetime(2024, 3, 2, 8)),
        make_record(100, dt.datetime(2024, 1, 9, 8)),
        make_record(100, dt.datetime(2024, 3, 2, 18)),
        make_record(100, dt.datetime(2024, 2, 1, 8)),
    ]
    days = [p.day for p in daily_trend(records)]
    assert days == sorted(set(days))
    assert len(days) == 3


def test_total_matches_dated_records(scenario_records):
    records = scenario_records + [make_record(999, None)]
    trend = daily_trend(records)
    assert sum(p.total for p in trend) == sum(r.amount for r in records if r.date is not None)


def test_dateless_only_is_empty():
    assert daily_trend([make_record(100, None)]) == []


def test_empty():
    assert daily_trend([]) == []


def test_day_label_has_no_zero_padding():
    assert day_label(dt.date(2024, 11, 5)) == "Nov 5"
