"""
Composite analysis — every figure the report page shows, for one request.

Filter → optional graph-range zoom → each reducer independently. The result
is a plain JSON-ready dict so it can be rendered, exported or cached as-is.
"""
from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from toll_analytics.analytics.common import sanitize_for_json, safe_divide
from toll_analytics.analytics.journeys import infer_journeys
from toll_analytics.analytics.locations import location_breakdown, top_locations_with_details
from toll_analytics.analytics.travel import fuel_estimate, travel_summary
from toll_analytics.analytics.trend import daily_trend
from toll_analytics.analytics.vehicles import by_vehicle, vehicle_display_names
from toll_analytics.config import MISSING_LOCATION, TOP_LOCATIONS_LIMIT, UNASSIGNED_LABEL
from toll_analytics.data.filters import TagQuery, filter_by_period, narrow_to_range, records_on_day
from toll_analytics.data.schemas import PeriodFilter, TollRecord

NO_DATA_MESSAGE = "No data for this period"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _time_label(ts: Optional[dt.datetime]) -> str:
    if ts is None:
        return MISSING_LOCATION
    return ts.strftime("%I:%M %p").lstrip("0")


def _day_detail(records: list[TollRecord], day: dt.date, labels: dict[str, str]) -> dict:
    """Drill-down for one day of the trend chart."""
    rows = records_on_day(records, day)
    return {
        "day": day,
        "label": f"{day:%A, %b} {day.day}, {day.year}",
        "count": len(rows),
        "total": sum(r.amount for r in rows),
        "locations": location_breakdown(rows),
        "transactions": [
            {
                "time": _time_label(r.exit_date or r.date),
                "timestamp": r.date,
                "location": r.exit_interchange,
                "vehicle": labels.get(r.transponder, UNASSIGNED_LABEL),
                "transponder": r.transponder,
                "license": r.license_plate or r.license_state,
                "amount": r.amount,
            }
            for r in rows
        ],
    }


def _weekly_rate(travel, journeys) -> dict:
    """Prefer journeys over raw passes when grouping actually merged something."""
    use_journeys = journeys.total_journeys != journeys.total_transactions
    count = journeys.total_journeys if use_journeys else travel.total_trips
    return {
        "unit": "journeys" if use_journeys else "trips",
        "count": count,
        "per_week": safe_divide(count, travel.weeks_in_period),
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def analyze(
    records: Iterable[TollRecord],
    period: Optional[PeriodFilter] = None,
    tags: TagQuery = None,
    display_range: Optional[tuple[Optional[dt.date], Optional[dt.date]]] = None,
    selected_day: Optional[dt.date] = None,
    today: Optional[dt.date] = None,
    top_n: int = TOP_LOCATIONS_LIMIT,
    miles_per_trip=None,
    mpg=None,
    gas_price=None,
) -> dict:
    """Run the full analysis for one upload and one set of view settings.

    ``display_range`` zooms into part of the period (the trend chart brush);
    ``full_daily_trend`` is always computed before that zoom so the chart
    keeps its full axis.
    """
    period = period or PeriodFilter()
    base = filter_by_period(records, period, tags, today)
    start, end = display_range or (None, None)
    display = narrow_to_range(base, start, end)

    labels = vehicle_display_names(display)
    travel = travel_summary(display, period, today)
    journeys = infer_journeys(display)
    period_start, period_end = period.resolve(today)

    result = {
        "period": {
            "type": period.period_type.value,
            "label": period.label(today),
            "start": period_start,
            "end": period_end,
        },
        "empty": not display,
        "message": NO_DATA_MESSAGE if not display else "",
        "transaction_count": len(display),
        "total_expenses": sum(r.amount for r in display),
        "full_daily_trend": daily_trend(base),
        "daily_trend": daily_trend(display),
        "by_vehicle": by_vehicle(display),
        "top_locations": top_locations_with_details(display, top_n),
        "travel_summary": {**travel.to_dict(), "busiest_weekday": travel.busiest_weekday},
        "journeys": journeys,
        "weekly_rate": _weekly_rate(travel, journeys),
        "selected_day": _day_detail(display, selected_day, labels) if selected_day else None,
        "fuel_estimate": fuel_estimate(
            travel.total_trips, travel.weeks_in_period, miles_per_trip, mpg, gas_price,
        ),
    }
    return sanitize_for_json(result)
