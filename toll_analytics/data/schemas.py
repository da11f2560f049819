"""
Record, period and aggregate schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from toll_analytics.config import MISSING_LOCATION


# ---------------------------------------------------------------------------
# Canonical toll record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TollRecord:
    """One toll transaction after column mapping and cell parsing.

    ``amount`` is in cents. ``date`` is the exit timestamp when present,
    otherwise the posting timestamp.
    """
    amount: int = 0
    date: Optional[dt.datetime] = None
    posting_date: Optional[dt.datetime] = None
    exit_date: Optional[dt.datetime] = None
    transponder: str = ""
    exit_interchange: str = MISSING_LOCATION
    transaction: str = ""
    vehicle_class: str = ""
    license_state: str = ""
    license_plate: str = ""
    raw: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    @property
    def day(self) -> Optional[dt.date]:
        return self.date.date() if self.date is not None else None

    @property
    def amount_dollars(self) -> float:
        return self.amount / 100


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------

class PeriodType(str, Enum):
    ALL = "all"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"


def _month_end(year: int, month: int) -> dt.date:
    if month == 12:
        return dt.date(year + 1, 1, 1) - dt.timedelta(days=1)
    return dt.date(year, month + 1, 1) - dt.timedelta(days=1)


@dataclass
class PeriodFilter:
    """Calendar window used to select records.

    Named periods (month/quarter/year) cover the calendar period containing
    ``anchor``; ``custom`` covers ``start_date``..``end_date`` inclusive.
    """
    period_type: PeriodType = PeriodType.ALL
    anchor: Optional[dt.date] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @property
    def is_bounded(self) -> bool:
        return self.period_type != PeriodType.ALL

    @property
    def has_custom_range(self) -> bool:
        return (
            self.period_type == PeriodType.CUSTOM
            and self.start_date is not None
            and self.end_date is not None
        )

    def _anchor_or(self, today: Optional[dt.date]) -> dt.date:
        for d in (self.anchor, self.start_date, self.end_date, today):
            if d is not None:
                return d
        return dt.date.today()

    def resolve(self, today: Optional[dt.date] = None) -> tuple[Optional[dt.date], Optional[dt.date]]:
        """Return inclusive (start_date, end_date) for this period.

        A custom period missing either bound resolves to the month containing
        the anchor, so an incomplete range never widens to all time.
        """
        if self.period_type == PeriodType.ALL:
            return None, None

        if self.has_custom_range:
            start, end = self.start_date, self.end_date
            if start > end:
                start, end = end, start
            return start, end

        anchor = self._anchor_or(today)

        if self.period_type == PeriodType.QUARTER:
            start_month = (anchor.month - 1) // 3 * 3 + 1
            return dt.date(anchor.year, start_month, 1), _month_end(anchor.year, start_month + 2)

        if self.period_type == PeriodType.YEAR:
            return dt.date(anchor.year, 1, 1), dt.date(anchor.year, 12, 31)

        # MONTH, and CUSTOM without a complete range
        return dt.date(anchor.year, anchor.month, 1), _month_end(anchor.year, anchor.month)

    def label(self, today: Optional[dt.date] = None) -> str:
        """Human-readable label for the period."""
        if self.period_type == PeriodType.ALL:
            return "All Time"
        start, end = self.resolve(today)
        if self.period_type == PeriodType.QUARTER:
            return f"Q{(start.month - 1) // 3 + 1} {start.year}"
        if self.period_type == PeriodType.YEAR:
            return str(start.year)
        if self.has_custom_range:
            return f"{start.isoformat()} to {end.isoformat()}"
        return f"{start:%B %Y}"


# ---------------------------------------------------------------------------
# Aggregate value objects
# ---------------------------------------------------------------------------

class _Value:
    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DailyTrendPoint(_Value):
    day: dt.date
    label: str
    total: int
    count: int


@dataclass(frozen=True)
class VehicleBreakdownRow(_Value):
    vehicle_id: str
    total: int
    count: int
    percent_of_total: float
    display_name: str = ""


@dataclass(frozen=True)
class LocationRow(_Value):
    location: str
    count: int
    total: int


@dataclass(frozen=True)
class LocationDay(_Value):
    day: dt.date
    label: str
    count: int


@dataclass(frozen=True)
class LocationDetailRow(_Value):
    location: str
    count: int
    total: int
    dates: list = field(default_factory=list)


@dataclass(frozen=True)
class JourneySummary(_Value):
    total_transactions: int
    total_journeys: int


@dataclass(frozen=True)
class TravelBehaviorSummary(_Value):
    total_trips: int
    weeks_in_period: float
    avg_weekly_trips: float
    top_location_names: list = field(default_factory=list)
    weekday_counts: Optional[dict] = None

    @property
    def busiest_weekday(self) -> Optional[str]:
        if not self.weekday_counts:
            return None
        name, count = max(self.weekday_counts.items(), key=lambda kv: kv[1])
        return name if count > 0 else None


@dataclass(frozen=True)
class FuelEstimate(_Value):
    """Fuel cost projection in dollars from user-supplied driving figures."""
    total_miles: float
    gallons: float
    cost: float
    weekly_cost: float
