"""
Upload endpoint: replace the current toll file.
"""
from __future__ import annotations

import gzip

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from toll_analytics.config import MAX_UPLOAD_BYTES
from toll_analytics.data.store import DataStore
from toll_analytics.exceptions import FormatError
from toll_analytics.api.dependencies import get_store_or_empty
from toll_analytics.api.response_models import UploadResponse

router = APIRouter(prefix="/api", tags=["upload"])


async def read_upload(f: UploadFile) -> tuple[str, bytes]:
    """Return (filename, bytes), undoing browser-side gzip compression."""
    if not f.filename:
        raise HTTPException(400, "Missing filename")

    filename = f.filename
    content = await f.read()

    # Strip .gz suffix if present (browser gzip-compressed upload)
    if filename.lower().endswith(".gz"):
        filename = filename[:-3]
        try:
            content = gzip.decompress(content)
        except (OSError, EOFError) as exc:
            raise HTTPException(400, f"Corrupt gzip upload: {exc}")

    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File too large ({len(content):,} bytes)")
    return filename, content


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    store: DataStore = Depends(get_store_or_empty),
):
    """Normalize a toll CSV/Excel export and make it the current data set."""
    filename, content = await read_upload(file)
    try:
        store.load_bytes(content, filename)
    except FormatError as exc:
        raise HTTPException(400, str(exc))

    return UploadResponse(
        status="uploaded",
        filename=store.filename,
        rows=store.row_count(),
        dated_rows=sum(1 for r in store.records if r.date is not None),
        date_range=store.date_range(),
        loaded_at=store.loaded_at.isoformat() if store.loaded_at else None,
    )


@router.delete("/upload")
def clear_upload(store: DataStore = Depends(get_store_or_empty)):
    """Forget the current file."""
    store.clear()
    return {"status": "cleared"}
