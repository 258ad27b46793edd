"""
Price queries — types, current prices, history, statistics, prediction.

Each function reads the DataStore without modifying it and returns a
JSON-ready dict. Parameter validation happens here, before any store or
forecaster call.
"""
from __future__ import annotations

import time
from typing import Any, Optional

from riceup.config import (
    MIN_WEEKS_AHEAD, MAX_WEEKS_AHEAD, MAX_PAGE_SIZE,
)
from riceup.data.schemas import PriceFilter
from riceup.data.store import DataStore, to_records
from riceup.analytics.common import records_payload, sanitize_for_json
from riceup.analytics.forecast import forecast_series
from riceup.analytics.series import select_series, series_keys
from riceup.errors import InvalidRequest

_STARTED_AT = time.monotonic()


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _require_int(name: str, value: Any, low: int, high: Optional[int] = None) -> int:
    """Coerce an integer parameter, rejecting floats with a fraction and bools."""
    if isinstance(value, bool):
        raise InvalidRequest(f"{name} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidRequest(f"{name} must be an integer")
        value = int(value)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"{name} must be an integer") from None
    if number < low or (high is not None and number > high):
        bounds = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise InvalidRequest(f"{name} must be {bounds}")
    return number


def _require_label(name: str, value: Any) -> str:
    if value is None or not str(value).strip():
        raise InvalidRequest("Missing required parameters: type and category",
                             {"missing": name})
    return str(value).strip()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def available_types(store: DataStore) -> dict[str, list[str]]:
    """Every rice type with its categories."""
    return store.types_index()


def current_prices(store: DataStore) -> dict:
    """Records on the latest date in the store."""
    df, as_of = store.current_slice()
    return {
        "current_prices": records_payload(to_records(df)),
        "as_of_date": as_of.isoformat(),
        "total_records": store.row_count(),
        "available_types": len(store.types()),
    }


def historical_prices(
    store: DataStore,
    rice_type: Optional[str] = None,
    category: Optional[str] = None,
    limit: Any = None,
    page: Any = None,
    page_size: Any = None,
) -> dict:
    """Newest-first history, either limited or paginated."""
    if limit is not None and (page is not None or page_size is not None):
        raise InvalidRequest("Use either limit or page/page_size, not both")
    if limit is not None:
        limit = _require_int("limit", limit, 1)
    if page is not None:
        page = _require_int("page", page, 1)
    if page_size is not None:
        page_size = _require_int("page_size", page_size, 1, MAX_PAGE_SIZE)

    filt = PriceFilter(rice_type, category)
    df, total, pagination = store.historical_slice(filt, limit=limit, page=page, page_size=page_size)
    result = {
        "historical_data": records_payload(to_records(df)),
        "total_records": total,
        "filtered_records": len(df),
    }
    if pagination is not None:
        result["pagination"] = pagination
    return result


def price_statistics(
    store: DataStore,
    rice_type: Optional[str] = None,
    category: Optional[str] = None,
) -> dict:
    """Summary statistics for a filter; zeros when nothing matches."""
    stats = store.statistics(PriceFilter(rice_type, category))
    return sanitize_for_json(stats)


def predict_price(
    store: DataStore,
    rice_type: Any,
    category: Any,
    weeks_ahead: Any = 1,
) -> dict:
    """Linear-trend forecast for one series.

    Raises InvalidRequest for bad parameters and InsufficientData when the
    series has fewer than two observations.
    """
    rice_type = _require_label("type", rice_type)
    category = _require_label("category", category)
    if weeks_ahead is None:
        weeks_ahead = MIN_WEEKS_AHEAD
    weeks_ahead = _require_int("weeks_ahead", weeks_ahead, MIN_WEEKS_AHEAD, MAX_WEEKS_AHEAD)

    series = select_series(store, rice_type, category)
    forecast = forecast_series(series, weeks_ahead)
    return {
        **forecast.to_dict(),
        "type": rice_type,
        "category": category,
        "weeks_ahead": weeks_ahead,
    }


def health_summary(store: DataStore) -> dict:
    """Service status for monitoring."""
    return {
        "status": "OK",
        "last_update": store.last_update.isoformat() if store.last_update else None,
        "total_records": store.row_count(),
        "available_types": len(store.types()),
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 1),
        "last_load": store.last_result.to_dict() if store.last_result else None,
    }


def series_overview(store: DataStore) -> list[dict]:
    """One line per series: observation count, first/last date, last price."""
    overview = []
    for rice_type, category in series_keys(store):
        series = select_series(store, rice_type, category)
        if series.empty:
            continue
        overview.append({
            "type": rice_type,
            "category": category,
            "data_points": len(series),
            "first_date": series["date"].iloc[0].isoformat(),
            "last_date": series["date"].iloc[-1].isoformat(),
            "last_price": float(series["price"].iloc[-1]),
        })
    return overview
