"""
DataStore — holds the records of the most recent upload in memory.

One file per run: every upload replaces the previous record set, and every
query filters that snapshot from scratch.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from toll_analytics.data.filters import TagQuery, filter_by_period
from toll_analytics.data.loader import load_records
from toll_analytics.data.schemas import PeriodFilter, TollRecord
from toll_analytics.exceptions import FormatError


class DataStore:
    """Current upload's toll records with period-filtered accessors."""

    def __init__(self) -> None:
        self.records: list[TollRecord] = []
        self.filename: str = ""
        self.loaded_at: Optional[dt.datetime] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_bytes(self, content: bytes | str, filename: Optional[str] = None) -> "DataStore":
        """Normalize an upload and make it the current record set.

        On FormatError the store is left empty so no stale analysis survives
        a failed upload.
        """
        print(f"Loading toll data from {filename or '(unnamed upload)'}...")
        try:
            records = load_records(content, filename)
        except FormatError as exc:
            print(f"  Failed: {exc}")
            self.clear()
            raise

        self.records = records
        self.filename = filename or ""
        self.loaded_at = dt.datetime.now()

        dated = sum(1 for r in records if r.date is not None)
        print(f"  {len(records):,} rows, {dated:,} with a usable date")
        return self

    def clear(self) -> None:
        self.records = []
        self.filename = ""
        self.loaded_at = None

    @property
    def is_loaded(self) -> bool:
        return self.loaded_at is not None

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def get_records(
        self,
        period: PeriodFilter | None = None,
        tags: TagQuery = None,
        today: Optional[dt.date] = None,
    ) -> list[TollRecord]:
        """Positive-amount records for a period and optional tag query."""
        return filter_by_period(self.records, period, tags, today)

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.records)

    def transponders(self) -> list[str]:
        """Distinct non-empty transponder ids, sorted."""
        return sorted({r.transponder for r in self.records if r.transponder})

    def date_range(self) -> str:
        """Human-readable span of dated records."""
        dates = [r.date for r in self.records if r.date is not None]
        if not dates:
            return "N/A"
        return f"{min(dates).date()} to {max(dates).date()}"
