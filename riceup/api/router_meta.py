"""
Meta endpoints: health, endpoint index.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from riceup import __version__
from riceup.data.store import DataStore
from riceup.api.dependencies import get_store_or_empty, ok
from riceup.api.response_models import Envelope
from riceup.analytics.prices import health_summary

router = APIRouter(tags=["meta"])


@router.get("/api/health", response_model=Envelope)
def health(store: DataStore = Depends(get_store_or_empty)):
    return ok(health_summary(store))


@router.get("/", response_model=Envelope)
def index():
    return ok({
        "message": "RiceUp Backend API",
        "version": __version__,
        "endpoints": {
            "GET /api/health": "Health check",
            "GET /api/prices/types": "Available rice types",
            "GET /api/prices/current": "Current prices",
            "GET /api/prices/historical": "Historical prices",
            "GET /api/prices/stats": "Price statistics",
            "POST /api/predict": "Price prediction",
        },
    })
