"""Tests for journey inference."""
import datetime as dt

from toll_analytics.analytics.journeys import infer_journeys, split_journeys

from conftest import make_record


def _at(hour, minute=0, day=1):
    return make_record(100, dt.datetime(2024, 1, day, hour, minute))


def test_scenario(scenario_records):
    summary = infer_journeys(scenario_records)
    assert summary.total_transactions == 3
    assert summary.total_journeys == 2


def test_passes_within_ninety_minutes_are_one_journey():
    records = [_at(9, 0), _at(9, 45), _at(10, 30)]
    assert infer_journeys(records).total_journeys == 1


def test_same_passes_across_two_days_split():
    records = [_at(9, 0, day=1), _at(9, 45, day=2), _at(10, 30, day=2)]
    assert infer_journeys(records).total_journeys >= 2


def test_three_hour_gap_splits():
    assert infer_journeys([_at(8), _at(11)]).total_journeys == 2


def test_gap_at_threshold_splits():
    assert infer_journeys([_at(8), _at(10)]).total_journeys == 2


def test_gap_is_measured_from_previous_pass():
    # each step is under two hours even though the span is five
    records = [_at(8), _at(9, 30), _at(11), _at(12, 30), _at(13)]
    assert infer_journeys(records).total_journeys == 1


def test_midnight_boundary_splits_short_gap():
    records = [_at(23, 50, day=1), _at(0, 10, day=2)]
    assert infer_journeys(records).total_journeys == 2


def test_unsorted_input():
    records = [_at(10, 30), _at(15), _at(9)]
    groups = split_journeys(records)
    assert [[r.date.hour for r in g] for g in groups] == [[9, 10], [15]]


def test_dateless_records_are_singletons():
    records = [make_record(100, None), _at(9), _at(9, 30), make_record(100, None)]
    summary = infer_journeys(records)
    assert summary.total_transactions == 4
    assert summary.total_journeys == 3


def test_empty():
    summary = infer_journeys([])
    assert summary.total_transactions == 0
    assert summary.total_journeys == 0
