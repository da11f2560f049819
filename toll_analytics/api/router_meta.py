"""
Meta endpoints: health.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from toll_analytics.data.store import DataStore
from toll_analytics.api.dependencies import get_store_or_empty
from toll_analytics.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok",
        loaded=store.is_loaded,
        rows=store.row_count(),
        filename=store.filename,
        date_range=store.date_range(),
        vehicles=len(store.transponders()),
    )
