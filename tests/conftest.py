# tests/conftest.py
from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from riceup.data.store import DataStore
from riceup.api.dependencies import set_store
from riceup.main import app

ROOT = Path(__file__).resolve().parents[1]  # repo root
SAMPLE_CSV = ROOT / "data" / "rice_prices.csv"


def make_rows(rice_type: str, category: str, prices: list[float], start: str = "2024-01-01",
              step_days: int = 7) -> list[dict]:
    """Raw CSV-style rows for one series, ``step_days`` apart."""
    first = dt.date.fromisoformat(start)
    return [
        {
            "date": (first + dt.timedelta(days=i * step_days)).isoformat(),
            "type": rice_type,
            "category": category,
            "price": str(p),
            "unit": "PHP/kg",
        }
        for i, p in enumerate(prices)
    ]


@pytest.fixture
def small_rows() -> list[dict]:
    return [
        {"date": "2024-01-01", "type": "LOCAL", "category": "Special", "price": "61.05"},
        {"date": "2024-06-01", "type": "LOCAL", "category": "Special", "price": "60.62"},
        {"date": "2024-01-01", "type": "IMPORTED", "category": "Premium", "price": "57.45"},
        {"date": "2024-06-01", "type": "IMPORTED", "category": "Premium", "price": "57.13"},
        {"date": "2024-03-01", "type": "LOCAL", "category": "Premium", "price": "0"},
    ]


@pytest.fixture
def small_store(small_rows) -> DataStore:
    store = DataStore()
    store.load(small_rows)
    return store


@pytest.fixture
def fallback_store() -> DataStore:
    store = DataStore()
    store.load_fallback()
    return store


@pytest.fixture
def client(fallback_store):
    set_store(fallback_store)
    yield TestClient(app)
    set_store(None)
