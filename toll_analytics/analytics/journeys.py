"""
Journey inference — group toll passes into likely continuous drives.

A journey is a run of same-day passes where each pass follows the previous
one by less than JOURNEY_GAP. One greedy left-to-right scan over the
time-sorted records; a boundary once drawn is never revisited.
"""
from __future__ import annotations

import datetime as dt
from typing import Iterable

from toll_analytics.config import JOURNEY_GAP
from toll_analytics.data.schemas import JourneySummary, TollRecord


def split_journeys(
    records: Iterable[TollRecord],
    gap: dt.timedelta = JOURNEY_GAP,
) -> list[list[TollRecord]]:
    """Partition records into journeys, dated journeys first in time order.

    Records without a timestamp cannot be placed next to anything and each
    form a journey of their own.
    """
    records = list(records)
    dated = sorted((r for r in records if r.date is not None), key=lambda r: r.date)

    journeys: list[list[TollRecord]] = []
    prev = None
    for r in dated:
        if prev is None or r.date.date() != prev.date() or r.date - prev >= gap:
            journeys.append([r])
        else:
            journeys[-1].append(r)
        prev = r.date

    journeys.extend([r] for r in records if r.date is None)
    return journeys


def infer_journeys(records: Iterable[TollRecord]) -> JourneySummary:
    """Transaction count vs inferred journey count."""
    records = list(records)
    return JourneySummary(
        total_transactions=len(records),
        total_journeys=len(split_journeys(records)),
    )
