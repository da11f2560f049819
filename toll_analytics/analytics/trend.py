"""
Daily spending trend.
"""
from __future__ import annotations

import datetime as dt
from typing import Iterable

from toll_analytics.analytics.common import records_frame
from toll_analytics.data.schemas import DailyTrendPoint, TollRecord


def day_label(day: dt.date) -> str:
    """Short axis label, e.g. 'Jan 5'."""
    return f"{day:%b} {day.day}"


def daily_trend(records: Iterable[TollRecord]) -> list[DailyTrendPoint]:
    """Total spend and transaction count per calendar day, oldest first.

    Records without a date cannot be placed on the axis and are skipped.
    """
    df = records_frame(records).dropna(subset=["date"])
    if df.empty:
        return []

    daily = (
        df.assign(day=df["date"].dt.date)
        .groupby("day")
        .agg(total=("amount", "sum"), count=("amount", "size"))
        .sort_index()
    )
    return [
        DailyTrendPoint(day=day, label=day_label(day), total=int(row["total"]), count=int(row["count"]))
        for day, row in daily.iterrows()
    ]
