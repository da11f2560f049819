"""
Per-vehicle (transponder) spend breakdown and display labels.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from toll_analytics.analytics.common import pct_of_total, records_frame
from toll_analytics.config import UNASSIGNED_LABEL, VEHICLE_LABEL
from toll_analytics.data.schemas import TollRecord, VehicleBreakdownRow


def _vehicle_totals(records: Iterable[TollRecord]) -> pd.DataFrame:
    """Spend and count per trimmed transponder, highest spend first."""
    df = records_frame(records)
    grouped = df.groupby("transponder", sort=False).agg(
        total=("amount", "sum"),
        count=("amount", "size"),
    )
    return grouped.sort_values("total", ascending=False, kind="stable")


def _labels(vehicle_ids) -> dict[str, str]:
    # Position in the spend ranking, so labels shift when the filtered view changes
    return {
        vid: UNASSIGNED_LABEL if vid == "" else VEHICLE_LABEL.format(n=i)
        for i, vid in enumerate(vehicle_ids, 1)
    }


def vehicle_display_names(records: Iterable[TollRecord]) -> dict[str, str]:
    """Map transponder id → 'Vehicle N' (or 'Unassigned' for the empty id)."""
    return _labels(_vehicle_totals(records).index)


def by_vehicle(records: Iterable[TollRecord]) -> list[VehicleBreakdownRow]:
    """Spend per transponder with share of the grand total.

    Transactions with no transponder are grouped under the empty id rather
    than dropped.
    """
    grouped = _vehicle_totals(records)
    if grouped.empty:
        return []

    grand_total = int(grouped["total"].sum())
    labels = _labels(grouped.index)
    return [
        VehicleBreakdownRow(
            vehicle_id=vid,
            total=int(row["total"]),
            count=int(row["count"]),
            percent_of_total=pct_of_total(int(row["total"]), grand_total),
            display_name=labels[vid],
        )
        for vid, row in grouped.iterrows()
    ]
