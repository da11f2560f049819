"""
FastAPI dependencies — DataStore singleton, period / view parsing.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Query

from toll_analytics.data.store import DataStore
from toll_analytics.data.schemas import PeriodFilter, PeriodType

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store_or_empty() -> DataStore:
    """Return the store even if nothing is uploaded (for upload/health endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_store() -> DataStore:
    store = get_store_or_empty()
    if not store.is_loaded:
        raise HTTPException(409, "No toll file uploaded yet")
    return store


# ---------------------------------------------------------------------------
# Query parsing
# ---------------------------------------------------------------------------

def parse_date_param(value: Optional[str], name: str) -> Optional[dt.date]:
    """YYYY-MM-DD → date, 400 on anything else."""
    if value is None or value == "":
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise HTTPException(400, f"Invalid {name}: {value} (expected YYYY-MM-DD)")


def build_period(
    period_type: Optional[str],
    anchor: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> PeriodFilter:
    """Build a PeriodFilter from raw strings; no type means all time."""
    if period_type is None or period_type == "":
        return PeriodFilter(PeriodType.ALL)
    try:
        pt = PeriodType(period_type)
    except ValueError:
        raise HTTPException(400, f"Invalid period_type: {period_type}")
    return PeriodFilter(
        period_type=pt,
        anchor=parse_date_param(anchor, "anchor"),
        start_date=parse_date_param(start_date, "start_date"),
        end_date=parse_date_param(end_date, "end_date"),
    )


def parse_period(
    period_type: Optional[str] = Query(None, description="all|month|quarter|year|custom"),
    anchor: Optional[str] = Query(None, description="YYYY-MM-DD inside the month/quarter/year"),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD (custom)"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD (custom)"),
) -> PeriodFilter:
    """Parse period query parameters into a PeriodFilter."""
    return build_period(period_type, anchor, start_date, end_date)


@dataclass
class ViewOptions:
    """Everything besides the period that shapes one analysis response."""
    tags: Optional[str] = None
    range_start: Optional[dt.date] = None
    range_end: Optional[dt.date] = None
    selected_day: Optional[dt.date] = None
    miles_per_trip: Optional[str] = None
    mpg: Optional[str] = None
    gas_price: Optional[str] = None

    @property
    def display_range(self) -> tuple[Optional[dt.date], Optional[dt.date]] | None:
        if self.range_start is None and self.range_end is None:
            return None
        return self.range_start, self.range_end

    def analyze_kwargs(self) -> dict:
        return {
            "tags": self.tags,
            "display_range": self.display_range,
            "selected_day": self.selected_day,
            "miles_per_trip": self.miles_per_trip,
            "mpg": self.mpg,
            "gas_price": self.gas_price,
        }


def build_view(
    tags: Optional[str] = None,
    range_start: Optional[str] = None,
    range_end: Optional[str] = None,
    selected_day: Optional[str] = None,
    miles_per_trip: Optional[str] = None,
    mpg: Optional[str] = None,
    gas_price: Optional[str] = None,
) -> ViewOptions:
    return ViewOptions(
        tags=tags,
        range_start=parse_date_param(range_start, "range_start"),
        range_end=parse_date_param(range_end, "range_end"),
        selected_day=parse_date_param(selected_day, "selected_day"),
        miles_per_trip=miles_per_trip,
        mpg=mpg,
        gas_price=gas_price,
    )


def parse_view(
    tags: Optional[str] = Query(None, description="Transponder substrings, comma/space separated"),
    range_start: Optional[str] = Query(None, description="YYYY-MM-DD zoom start"),
    range_end: Optional[str] = Query(None, description="YYYY-MM-DD zoom end"),
    selected_day: Optional[str] = Query(None, description="YYYY-MM-DD drill-down day"),
    miles_per_trip: Optional[str] = Query(None),
    mpg: Optional[str] = Query(None),
    gas_price: Optional[str] = Query(None),
) -> ViewOptions:
    """Parse tag, zoom, drill-down and fuel query parameters."""
    return build_view(tags, range_start, range_end, selected_day, miles_per_trip, mpg, gas_price)
