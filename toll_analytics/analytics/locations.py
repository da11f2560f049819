"""
Toll location (exit interchange) rankings.

One ranking reducer serves both the period-wide top list and the single-day
breakdown; only the record subset and the limit differ. Locations are keyed
by raw code, display names are applied by the caller.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from toll_analytics.analytics.common import records_frame
from toll_analytics.analytics.trend import day_label
from toll_analytics.config import DAY_BREAKDOWN_LIMIT, TOP_LOCATIONS_LIMIT
from toll_analytics.data.schemas import LocationDay, LocationDetailRow, LocationRow, TollRecord


def _ranked(df: pd.DataFrame, limit: int) -> pd.DataFrame:
    grouped = df.groupby("location", sort=False).agg(
        count=("amount", "size"),
        total=("amount", "sum"),
    )
    # stable sort: equal totals keep first-seen order
    return grouped.sort_values("total", ascending=False, kind="stable").head(max(limit, 0))


def top_locations(records: Iterable[TollRecord], limit: int = TOP_LOCATIONS_LIMIT) -> list[LocationRow]:
    """Locations ranked by total spend, at most ``limit`` rows."""
    ranked = _ranked(records_frame(records), limit)
    return [
        LocationRow(location=loc, count=int(row["count"]), total=int(row["total"]))
        for loc, row in ranked.iterrows()
    ]


def location_breakdown(records: Iterable[TollRecord], limit: int = DAY_BREAKDOWN_LIMIT) -> list[LocationRow]:
    """Location ranking for a small subset, typically one selected day."""
    return top_locations(records, limit)


def top_locations_with_details(
    records: Iterable[TollRecord],
    limit: int = TOP_LOCATIONS_LIMIT,
) -> list[LocationDetailRow]:
    """Top locations plus the days each one was passed and how often."""
    df = records_frame(records)
    ranked = _ranked(df, limit)
    if ranked.empty:
        return []

    dated = df.dropna(subset=["date"])
    per_day: dict[str, list[LocationDay]] = {}
    if not dated.empty:
        counts = dated.assign(day=dated["date"].dt.date).groupby(["location", "day"]).size()
        for (loc, day), n in counts.sort_index().items():
            per_day.setdefault(loc, []).append(LocationDay(day=day, label=day_label(day), count=int(n)))

    return [
        LocationDetailRow(
            location=loc,
            count=int(row["count"]),
            total=int(row["total"]),
            dates=per_day.get(loc, []),
        )
        for loc, row in ranked.iterrows()
    ]
