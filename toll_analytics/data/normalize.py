"""
Header matching and per-cell parsing (amounts, timestamps).
"""
from __future__ import annotations

import datetime as dt
import re
import warnings
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

import pandas as pd

from toll_analytics.config import AMOUNT_STRIP_RE, DATE_FORMATS

_WS_RE = re.compile(r"\s+")
_CENT = Decimal("0.01")


# ---------------------------------------------------------------------------
# Header matching
# ---------------------------------------------------------------------------

def normalize_header(header) -> str:
    """Lowercase, treat '#' as 'number', collapse whitespace.

    "Card #" and "card  number" both become "card number".
    """
    if header is None:
        return ""
    text = str(header).lower().replace("#", " number")
    return _WS_RE.sub(" ", text).strip()


def find_column(headers: list[str], *names: str) -> int:
    """Index of the first header matching any of ``names``, or -1.

    Names are tried in order. A header matches a name when, after
    normalization, they are equal or either one contains the other, so
    "Amount" finds "Toll Amount" and "Exit Date" finds "Exit Date/Time".
    """
    normalized = [normalize_header(h) for h in headers]
    for name in names:
        n = normalize_header(name)
        if not n:
            continue
        for i, h in enumerate(normalized):
            if h and (h == n or n in h or h in n):
                return i
    return -1


# ---------------------------------------------------------------------------
# Cell parsing
# ---------------------------------------------------------------------------

def parse_amount(value) -> int:
    """Parse "$1,234.56" / "7" / "" into cents. Anything unparseable is 0."""
    if value is None:
        return 0
    text = AMOUNT_STRIP_RE.sub("", str(value))
    if not text:
        return 0
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return 0
    if not amount.is_finite():
        return 0
    return int((amount / _CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_date(value) -> Optional[dt.datetime]:
    """Parse a toll timestamp, trying the operator formats before a free-form parse."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt)
        except ValueError:
            continue

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.to_pydatetime()


def clean_text(value) -> str:
    """Trimmed string for a descriptive cell; missing becomes ''."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()
