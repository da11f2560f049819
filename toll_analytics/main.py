"""
Toll Analytics — FastAPI app factory.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toll_analytics.data.store import DataStore
from toll_analytics.api.dependencies import set_store
from toll_analytics.api.router_meta import router as meta_router
from toll_analytics.api.router_upload import router as upload_router
from toll_analytics.api.router_analysis import router as analysis_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start with an empty store; data arrives through /api/upload."""
    set_store(DataStore())
    print("\nToll Analytics ready — upload a toll CSV or Excel export to begin.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Toll Analytics API",
        description="Toll transaction analytics — spending trend, vehicles, locations, journeys",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(analysis_router)

    return app


app = create_app()
