"""
Price endpoints: types, current, historical, stats, predict.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from riceup.data.store import DataStore
from riceup.api.dependencies import get_store, ok
from riceup.api.response_models import Envelope, PredictRequest
from riceup.analytics.prices import (
    available_types,
    current_prices,
    historical_prices,
    price_statistics,
    predict_price,
)

router = APIRouter(prefix="/api", tags=["prices"])


@router.get("/prices/types", response_model=Envelope)
def types(store: DataStore = Depends(get_store)):
    """Rice types and the categories recorded for each."""
    return ok(available_types(store))


@router.get("/prices/current", response_model=Envelope)
def current(store: DataStore = Depends(get_store)):
    """Prices on the most recent date in the dataset."""
    return ok(current_prices(store))


@router.get("/prices/historical", response_model=Envelope)
def historical(
    type: Optional[str] = Query(None, description="Rice type, or 'all'"),
    category: Optional[str] = Query(None, description="Category, or 'all'"),
    limit: Optional[int] = Query(None, description="Max rows (default 100)"),
    page: Optional[int] = Query(None, description="1-based page number"),
    page_size: Optional[int] = Query(None, description="Rows per page"),
    store: DataStore = Depends(get_store),
):
    """Newest-first price history, limited or paginated."""
    return ok(historical_prices(store, type, category, limit=limit, page=page, page_size=page_size))


@router.get("/prices/stats", response_model=Envelope)
def stats(
    type: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    store: DataStore = Depends(get_store),
):
    """Average, min and max price with the matching records."""
    return ok(price_statistics(store, type, category))


@router.post("/predict", response_model=Envelope)
def predict(body: PredictRequest, store: DataStore = Depends(get_store)):
    """Linear-trend price forecast 1-52 weeks ahead."""
    return ok(predict_price(store, body.type, body.category, body.weeks_ahead))
