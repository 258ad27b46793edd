"""
Series selection — one (type, category) pair as a date-ordered frame.
"""
from __future__ import annotations

import pandas as pd

from riceup.data.store import DataStore


def select_series(store: DataStore, rice_type: str, category: str) -> pd.DataFrame:
    """Positive-price records for one series, oldest first.

    Returns an empty frame when nothing matches; callers decide whether a
    short series is an error.
    """
    df = store.df
    df = df[(df["type"] == rice_type) & (df["category"] == category) & (df["price"] > 0)]
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def series_keys(store: DataStore) -> list[tuple[str, str]]:
    """Every (type, category) pair present in the store, sorted."""
    if store.df.empty:
        return []
    pairs = store.df[["type", "category"]].drop_duplicates()
    return sorted(pairs.itertuples(index=False, name=None))
