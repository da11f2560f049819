"""
Period, vehicle-tag and date-range selection over toll records.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Iterable, Optional, Union

from toll_analytics.data.schemas import PeriodFilter, TollRecord

_TAG_SPLIT_RE = re.compile(r"[\s,]+")

TagQuery = Union[str, Iterable[str], None]


def parse_tag_query(tags: TagQuery) -> list[str]:
    """Split a free-text tag query on whitespace/commas into lowercase tokens."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tokens = _TAG_SPLIT_RE.split(tags)
    else:
        tokens = [t for tag in tags for t in _TAG_SPLIT_RE.split(str(tag))]
    return [t.strip().lower() for t in tokens if t.strip()]


def matches_tags(record: TollRecord, tokens: list[str]) -> bool:
    """True when any token is a substring of the record's transponder (case-insensitive)."""
    if not tokens:
        return True
    transponder = record.transponder.lower()
    return any(tok in transponder for tok in tokens)


def _day_bounds(start: dt.date, end: dt.date) -> tuple[dt.datetime, dt.datetime]:
    return (
        dt.datetime.combine(start, dt.time.min),
        dt.datetime.combine(end, dt.time.max),
    )


def _within(records: Iterable[TollRecord], start: dt.date, end: dt.date) -> list[TollRecord]:
    lo, hi = _day_bounds(start, end)
    return [r for r in records if r.date is not None and lo <= r.date <= hi]


def filter_by_period(
    records: Iterable[TollRecord],
    period: Optional[PeriodFilter] = None,
    tags: TagQuery = None,
    today: Optional[dt.date] = None,
) -> list[TollRecord]:
    """Records with a positive amount inside ``period`` whose transponder matches ``tags``.

    Refunds and credits (amount <= 0) never reach analytics. Any period other
    than ``all`` requires a parsed date, so dateless rows only survive the
    all-time view. The tag query is applied after the date window.
    """
    filtered = [r for r in records if r.amount > 0]

    if period is not None and period.is_bounded:
        start, end = period.resolve(today)
        filtered = _within(filtered, start, end)

    tokens = parse_tag_query(tags)
    if tokens:
        filtered = [r for r in filtered if matches_tags(r, tokens)]

    return filtered


def narrow_to_range(
    records: Iterable[TollRecord],
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
) -> list[TollRecord]:
    """Zoom an already-filtered set to a day range; no bounds leaves it unchanged."""
    records = list(records)
    if start is None and end is None:
        return records
    lo = start or dt.date.min
    hi = end or dt.date.max
    if lo > hi:
        lo, hi = hi, lo
    return _within(records, lo, hi)


def records_on_day(records: Iterable[TollRecord], day: dt.date) -> list[TollRecord]:
    """Dated records falling on ``day``, in time order."""
    on_day = [r for r in records if r.date is not None and r.date.date() == day]
    return sorted(on_day, key=lambda r: r.date)
