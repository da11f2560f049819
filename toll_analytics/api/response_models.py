"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    rows: int
    filename: str
    date_range: str
    vehicles: int


class UploadResponse(BaseModel):
    status: str
    filename: str
    rows: int
    dated_rows: int
    date_range: str
    loaded_at: Optional[str] = None
