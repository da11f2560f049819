"""Tests for per-vehicle breakdown and display labels."""
import datetime as dt

import pytest

from toll_analytics.analytics.vehicles import by_vehicle, vehicle_display_names

from conftest import make_record


def _records():
    return [
        make_record(100, dt.datetime(2024, 1, 1), "T-1"),
        make_record(500, dt.datetime(2024, 1, 1), ""),
        make_record(300, dt.datetime(2024, 1, 2), " T-2 "),
        make_record(300, None, "T-2"),
        make_record(50, None, "T-1"),
    ]


class TestByVehicle:

    def test_grouped_and_sorted_by_spend(self):
        rows = by_vehicle(_records())
        assert [(r.vehicle_id, r.total, r.count) for r in rows] == [
            ("T-2", 600, 2),
            ("", 500, 1),
            ("T-1", 150, 2),
        ]

    def test_totals_sum_to_positive_amounts(self):
        records = _records()
        assert sum(r.total for r in by_vehicle(records)) == sum(r.amount for r in records if r.amount > 0)

    def test_percentages_sum_to_hundred(self):
        rows = by_vehicle(_records())
        assert sum(r.percent_of_total for r in rows) == pytest.approx(100.0)
        assert rows[0].percent_of_total == pytest.approx(600 / 1250 * 100)

    def test_zero_grand_total_gives_zero_percent(self):
        rows = by_vehicle([make_record(0, None, "T-1"), make_record(0, None, "T-2")])
        assert [r.percent_of_total for r in rows] == [0, 0]

    def test_ties_keep_encounter_order(self):
        rows = by_vehicle([make_record(100, None, "B"), make_record(100, None, "A")])
        assert [r.vehicle_id for r in rows] == ["B", "A"]

    def test_display_names_attached(self):
        rows = by_vehicle(_records())
        assert [r.display_name for r in rows] == ["Vehicle 1", "Unassigned", "Vehicle 3"]

    def test_empty(self):
        assert by_vehicle([]) == []


class TestDisplayNames:

    def test_rank_labels(self):
        assert vehicle_display_names(_records()) == {
            "T-2": "Vehicle 1",
            "": "Unassigned",
            "T-1": "Vehicle 3",
        }

    def test_labels_follow_current_view(self):
        records = _records()
        only_t1 = [r for r in records if r.transponder == "T-1"]
        assert vehicle_display_names(only_t1) == {"T-1": "Vehicle 1"}

    def test_empty(self):
        assert vehicle_display_names([]) == {}
