"""
Shared helpers for analytics modules: safe math, record frames, JSON cleanup.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Iterable

import numpy as np
import pandas as pd

from toll_analytics.config import MISSING_LOCATION
from toll_analytics.data.schemas import TollRecord

FRAME_COLUMNS = ["amount", "date", "transponder", "location"]


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def cents_to_dollars(cents: int) -> float:
    return round(cents / 100, 2)


def format_currency(cents: int) -> str:
    """$1,234.56 from cents."""
    return f"${cents / 100:,.2f}"


def records_frame(records: Iterable[TollRecord]) -> pd.DataFrame:
    """Flatten records into the columns the group-by reducers need.

    Row order follows the input so stable sorts keep encounter order on ties.
    """
    rows = [
        (r.amount, r.date, r.transponder.strip(), r.exit_interchange or MISSING_LOCATION)
        for r in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["amount"] = df["amount"].astype("int64")
    df["date"] = pd.to_datetime(df["date"])
    return df


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas/date types to native Python for JSON serialization."""
    if hasattr(obj, "to_dict") and not isinstance(obj, (pd.DataFrame, pd.Series)):
        return sanitize_for_json(obj.to_dict())
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, float) and (math.isnan(k) or math.isinf(k)):
                continue
            clean[str(k) if not isinstance(k, str) else k] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if obj is pd.NaT:
        return None
    if isinstance(obj, (dt.datetime, dt.date)):
        return obj.isoformat()
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
