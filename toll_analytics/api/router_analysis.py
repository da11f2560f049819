"""
Analysis endpoints — period-filtered report over the current or a one-shot upload.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from toll_analytics.analytics.dashboard import analyze
from toll_analytics.data.loader import load_records
from toll_analytics.data.schemas import PeriodFilter
from toll_analytics.data.store import DataStore
from toll_analytics.exceptions import FormatError
from toll_analytics.api.dependencies import (
    ViewOptions, build_period, build_view, get_store, parse_period, parse_view,
)
from toll_analytics.api.router_upload import read_upload

router = APIRouter(prefix="/api", tags=["analysis"])


@router.get("/analysis")
def analysis(
    store: DataStore = Depends(get_store),
    period: PeriodFilter = Depends(parse_period),
    view: ViewOptions = Depends(parse_view),
):
    """Full report for the uploaded file: trend, vehicles, locations, journeys, travel."""
    return JSONResponse(content=analyze(store.records, period, **view.analyze_kwargs()))


@router.post("/analyze")
async def analyze_upload(
    file: UploadFile = File(...),
    period_type: Optional[str] = Form(None),
    anchor: Optional[str] = Form(None),
    start_date: Optional[str] = Form(None),
    end_date: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    range_start: Optional[str] = Form(None),
    range_end: Optional[str] = Form(None),
    selected_day: Optional[str] = Form(None),
    miles_per_trip: Optional[str] = Form(None),
    mpg: Optional[str] = Form(None),
    gas_price: Optional[str] = Form(None),
):
    """One-shot: normalize the posted file and analyze it without storing it."""
    period = build_period(period_type, anchor, start_date, end_date)
    view = build_view(tags, range_start, range_end, selected_day, miles_per_trip, mpg, gas_price)

    filename, content = await read_upload(file)
    try:
        records = load_records(content, filename)
    except FormatError as exc:
        raise HTTPException(400, str(exc))

    return JSONResponse(content=analyze(records, period, **view.analyze_kwargs()))
