"""
Travel behavior — weekly trip rate, weekday pattern, favourite locations, fuel estimate.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Optional

from toll_analytics.analytics.common import safe_divide
from toll_analytics.analytics.locations import top_locations
from toll_analytics.config import MIN_WEEKS, TRAVEL_TOP_LOCATIONS, WEEKDAY_NAMES
from toll_analytics.data.schemas import FuelEstimate, PeriodFilter, TollRecord, TravelBehaviorSummary

_WEEK_SECONDS = 7 * 24 * 3600


def weeks_in_period(
    records: list[TollRecord],
    period: Optional[PeriodFilter] = None,
    today: Optional[dt.date] = None,
) -> float:
    """Length of the analysed window in weeks.

    Bounded periods use their calendar span, whatever the data covers. The
    all-time view falls back to the span between the first and last dated
    record, or one week when there are fewer than two.
    """
    if period is not None and period.is_bounded:
        start, end = period.resolve(today)
        days = (end - start).days + 1
        return max(days / 7, MIN_WEEKS)

    dates = [r.date for r in records if r.date is not None]
    if len(dates) < 2:
        return 1.0
    span = (max(dates) - min(dates)).total_seconds() / _WEEK_SECONDS
    return max(span, MIN_WEEKS)


def weekday_counts(records: list[TollRecord]) -> Optional[dict[str, int]]:
    """Dated trips per weekday, Sunday first; None when nothing is dated."""
    counts = dict.fromkeys(WEEKDAY_NAMES, 0)
    seen = False
    for r in records:
        if r.date is None:
            continue
        counts[WEEKDAY_NAMES[(r.date.weekday() + 1) % 7]] += 1
        seen = True
    return counts if seen else None


def travel_summary(
    records,
    period: Optional[PeriodFilter] = None,
    today: Optional[dt.date] = None,
    top_n: int = TRAVEL_TOP_LOCATIONS,
) -> TravelBehaviorSummary:
    """Weekly travel rate and habits for an already-filtered record set."""
    records = list(records)
    weeks = weeks_in_period(records, period, today)
    total = len(records)
    return TravelBehaviorSummary(
        total_trips=total,
        weeks_in_period=weeks,
        avg_weekly_trips=safe_divide(total, weeks),
        top_location_names=[row.location for row in top_locations(records, top_n)],
        weekday_counts=weekday_counts(records),
    )


def _as_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def fuel_estimate(
    total_trips: int,
    weeks: float,
    miles_per_trip,
    mpg,
    gas_price,
) -> Optional[FuelEstimate]:
    """Project fuel cost from user-supplied miles per trip, MPG and gas price.

    Returns None unless miles and MPG are positive and the price is not
    negative. Toll data carries no distances, so nothing here is measured.
    """
    miles = _as_float(miles_per_trip)
    m = _as_float(mpg)
    price = _as_float(gas_price)
    if miles is None or miles <= 0 or m is None or m <= 0 or price is None or price < 0:
        return None

    total_miles = total_trips * miles
    gallons = total_miles / m
    cost = gallons * price
    return FuelEstimate(
        total_miles=total_miles,
        gallons=gallons,
        cost=cost,
        weekly_cost=safe_divide(cost, weeks) if weeks > 0 else 0.0,
    )
