"""
DataStore — In-memory price dataset backed by pandas.

Loaded once at startup, read on every request. A load builds the new frame
completely before swapping it in, so readers never see a half-loaded store.
"""
from __future__ import annotations

import datetime as dt
import math
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from riceup.config import DATA_FILE, HISTORICAL_LIMIT, DEFAULT_PAGE_SIZE
from riceup.data.loader import read_csv_rows, read_fallback_rows
from riceup.data.normalize import normalize_rows
from riceup.data.schemas import RECORD_COLUMNS, LoadResult, PriceFilter, PriceRecord
from riceup.errors import DataSourceUnavailable

_SERIES_KEY = ["date", "type", "category"]


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def records_frame(records: Iterable[PriceRecord]) -> pd.DataFrame:
    """Build a store-shaped DataFrame from PriceRecords."""
    df = pd.DataFrame(
        [(r.date, r.type, r.category, r.price, r.unit) for r in records],
        columns=RECORD_COLUMNS,
    )
    df["price"] = df["price"].astype(float)
    return df


def to_records(df: pd.DataFrame) -> list[PriceRecord]:
    """Convert store-shaped rows back into PriceRecords."""
    return [
        PriceRecord(date=row.date, type=row.type, category=row.category,
                    price=float(row.price), unit=row.unit)
        for row in df.itertuples(index=False)
    ]


class DataStore:
    """In-memory rice price records with filtered accessors."""

    def __init__(self) -> None:
        self.df: pd.DataFrame = records_frame([])
        self.last_update: Optional[dt.datetime] = None
        self.last_result: Optional[LoadResult] = None
        self._source_path: Optional[Path] = None
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, rows: Iterable[Mapping[Any, Any]], source: str = "rows",
             rejected: int = 0) -> LoadResult:
        """Normalize raw rows and replace the whole dataset.

        Later rows win over earlier ones for the same (date, type, category).
        ``rejected`` counts rows the reader already dropped before normalizing.
        """
        records, result = normalize_rows(rows, source)
        result.rejected += rejected
        df = records_frame(records)

        pre = len(df)
        df = df.drop_duplicates(subset=_SERIES_KEY, keep="last").reset_index(drop=True)
        result.duplicates = pre - len(df)
        result.accepted = len(df)

        self.df, self.last_update, self.last_result = df, _utcnow(), result
        self._loaded = True
        self._report(result)
        return result

    def load_csv(self, filepath: Path = DATA_FILE) -> LoadResult:
        """Load from a CSV file. Raises DataSourceUnavailable and leaves the
        current dataset untouched when the file cannot be read."""
        filepath = Path(filepath)
        print(f"Loading rice prices from {filepath}...")
        rows, bad_lines = read_csv_rows(filepath)
        self._source_path = filepath
        return self.load(rows, source=filepath.name, rejected=bad_lines)

    def load_fallback(self) -> LoadResult:
        """Load the embedded sample dataset."""
        print("Loading embedded sample data...")
        self._source_path = None
        return self.load(read_fallback_rows(), source="embedded")

    def reload(self) -> LoadResult:
        """Repeat the last file or fallback load."""
        if self._source_path is not None:
            return self.load_csv(self._source_path)
        return self.load_fallback()

    def _report(self, result: LoadResult) -> None:
        print(f"  Loaded {result.accepted:,} of {result.total:,} rows from {result.source}")
        if result.rejected:
            print(f"  Warning: rejected {result.rejected:,} malformed rows")
        if result.skipped:
            print(f"  Skipped {result.skipped:,} conflict-marker/excluded rows")
        if result.duplicates:
            print(f"  Dedup: {result.duplicates:,} rows superseded by later duplicates")
        if not self.df.empty:
            start, end = self.date_range()
            print(f"  Data covers {start} to {end}")
            counts = self.df["type"].value_counts().sort_index()
            print(f"  By type: {', '.join(f'{t}={n}' for t, n in counts.items())}")

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _apply_filter(self, df: pd.DataFrame, filt: PriceFilter | None) -> pd.DataFrame:
        """Restrict a frame to a type and/or category."""
        if filt is None:
            return df
        if filt.type is not None:
            df = df[df["type"] == filt.type]
        if filt.category is not None:
            df = df[df["category"] == filt.category]
        return df

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def types_index(self) -> dict[str, list[str]]:
        """Every type with its sorted list of categories."""
        index: dict[str, list[str]] = {}
        for rice_type, group in self.df.groupby("type", sort=True):
            index[rice_type] = sorted(group["category"].unique().tolist())
        return index

    def current_slice(self) -> tuple[pd.DataFrame, dt.date | dt.datetime]:
        """Rows dated on the latest date in the store, plus that date.

        An empty store yields an empty frame dated now.
        """
        if self.df.empty:
            return self.df, _utcnow()
        latest = self.df["date"].max()
        return self.df[self.df["date"] == latest], latest

    def historical_slice(
        self,
        filt: PriceFilter | None = None,
        limit: int | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> tuple[pd.DataFrame, int, dict | None]:
        """Newest-first rows for a filter: (rows, total matches, pagination).

        Passing page or page_size switches to page mode; otherwise at most
        ``limit`` rows are returned and pagination is None.
        """
        df = self._apply_filter(self.df, filt)
        df = df.sort_values("date", ascending=False, kind="stable")
        total = len(df)

        if page is None and page_size is None:
            limit = HISTORICAL_LIMIT if limit is None else limit
            return df.head(limit), total, None

        page = page or 1
        page_size = page_size or DEFAULT_PAGE_SIZE
        total_pages = math.ceil(total / page_size)
        start = (page - 1) * page_size
        pagination = {
            "page": page,
            "page_size": page_size,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }
        return df.iloc[start:start + page_size], total, pagination

    def statistics(self, filt: PriceFilter | None = None) -> dict:
        """Average/min/max price and date span over positive prices."""
        df = self._apply_filter(self.df, filt)
        df = df[df["price"] > 0]
        if df.empty:
            return {
                "average_price": 0.0,
                "min_price": 0.0,
                "max_price": 0.0,
                "min_price_entry": None,
                "max_price_entry": None,
                "date_range": {"start": None, "end": None},
                "count": 0,
            }

        min_row = df.loc[[df["price"].idxmin()]]
        max_row = df.loc[[df["price"].idxmax()]]
        return {
            "average_price": round(float(df["price"].mean()), 2),
            "min_price": float(df["price"].min()),
            "max_price": float(df["price"].max()),
            "min_price_entry": to_records(min_row)[0],
            "max_price_entry": to_records(max_row)[0],
            "date_range": {"start": df["date"].min(), "end": df["date"].max()},
            "count": len(df),
        }

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def types(self) -> list[str]:
        """Unique type names sorted alphabetically."""
        if self.df.empty:
            return []
        return sorted(self.df["type"].unique().tolist())

    def categories(self) -> list[str]:
        """Unique category names sorted alphabetically."""
        if self.df.empty:
            return []
        return sorted(self.df["category"].unique().tolist())

    def date_range(self) -> tuple[Optional[dt.date], Optional[dt.date]]:
        if self.df.empty:
            return None, None
        return self.df["date"].min(), self.df["date"].max()

    def row_count(self) -> int:
        return len(self.df)


def open_store(filepath: Path | None = None, use_fallback: bool | None = None) -> DataStore:
    """Build the startup store: the CSV if readable, else the embedded
    dataset, else (fallback disabled) an empty store."""
    from riceup import config

    filepath = config.DATA_FILE if filepath is None else Path(filepath)
    use_fallback = config.USE_FALLBACK if use_fallback is None else use_fallback

    store = DataStore()
    try:
        store.load_csv(filepath)
    except DataSourceUnavailable as exc:
        print(f"  {exc.message}")
        if use_fallback:
            store.load_fallback()
        else:
            print("  Fallback disabled, starting with empty dataset")
            store.load([], source="empty")
    return store
