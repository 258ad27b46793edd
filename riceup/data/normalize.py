"""
Column resolution and row normalization: raw CSV rows → PriceRecord.
"""
from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from riceup.config import (
    COLUMN_ALIASES, POSITIONAL_FIELDS, CONFLICT_MARKERS, DATE_FORMATS,
    DEFAULT_UNIT, TYPE_NORMALIZATION, EXCLUDED_TYPES,
)
from riceup.data.schemas import LoadResult, PriceRecord
from riceup.errors import RowRejected

_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d+)?|\.\d+)")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------

def resolve_columns(columns: Iterable[Any]) -> dict[str, Any]:
    """Map each logical field (date, type, category, price, unit) to a raw column.

    An alias equal to the stripped, lower-cased column name wins; otherwise
    aliases are tried in priority order as substrings of it. Fields no alias
    matched fall back to their column position. Unit has no positional fallback.
    """
    columns = [c for c in columns if c is not None]
    names = [str(c).strip().lower() for c in columns]
    resolved: dict[str, Any] = {}
    claimed: set[int] = set()

    def _claim(field: str, matches) -> bool:
        for alias in COLUMN_ALIASES[field]:
            idx = next(
                (i for i, name in enumerate(names) if i not in claimed and matches(alias, name)),
                None,
            )
            if idx is not None:
                resolved[field] = columns[idx]
                claimed.add(idx)
                return True
        return False

    for field in COLUMN_ALIASES:
        if not _claim(field, lambda alias, name: alias == name):
            _claim(field, lambda alias, name: alias in name)

    for pos, field in enumerate(POSITIONAL_FIELDS):
        if field in resolved or pos >= len(columns) or pos in claimed:
            continue
        resolved[field] = columns[pos]
        claimed.add(pos)

    return resolved


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return pd.api.types.is_scalar(value) and pd.isna(value)


def is_conflict_row(row: Mapping[Any, Any]) -> bool:
    """True for rows produced by merge-conflict markers left in the file."""
    for key in row:
        if isinstance(key, str) and key.strip().startswith(CONFLICT_MARKERS):
            return True
    first = next(iter(row.values()), None)
    return isinstance(first, str) and first.strip().startswith(CONFLICT_MARKERS)


def parse_date(value: Any) -> dt.date:
    """Parse a calendar date. Raises ValueError instead of guessing."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if _is_missing(value):
        raise ValueError("missing date")
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized date: {text!r}")


def parse_price(value: Any) -> float:
    """Parse a positive price, tolerating currency symbols and thousands separators."""
    if isinstance(value, bool) or _is_missing(value):
        raise ValueError("missing price")
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        match = _NUMBER_RE.search(str(value).replace(",", ""))
        if match is None:
            raise ValueError(f"non-numeric price: {value!r}")
        # First number only; "61.05/2kg" is 61.05, not 61.052
        price = float(match.group())
    if math.isnan(price) or math.isinf(price):
        raise ValueError(f"non-numeric price: {value!r}")
    if price <= 0:
        raise ValueError(f"non-positive price: {value!r}")
    return price


def clean_label(value: Any) -> Optional[str]:
    """Strip and collapse whitespace; None for blank values."""
    if _is_missing(value):
        return None
    return _WHITESPACE_RE.sub(" ", str(value)).strip() or None


def normalize_type(value: str) -> str:
    """Map variant type names to their canonical label."""
    return TYPE_NORMALIZATION.get(value.upper(), value)


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(
    row: Mapping[Any, Any],
    columns: dict[str, Any] | None = None,
) -> PriceRecord | None:
    """Turn one raw row into a PriceRecord.

    Returns None for rows that are silently dropped (merge-conflict residue,
    excluded types). Raises RowRejected for malformed rows.
    """
    if is_conflict_row(row):
        return None
    if columns is None:
        columns = resolve_columns(row.keys())

    def _get(field: str) -> Any:
        col = columns.get(field)
        return row.get(col) if col is not None else None

    raw = dict(row)
    rice_type = clean_label(_get("type"))
    category = clean_label(_get("category"))
    if rice_type is None:
        raise RowRejected("missing type", raw)
    if category is None:
        raise RowRejected("missing category", raw)

    rice_type = normalize_type(rice_type)
    if rice_type.upper() in EXCLUDED_TYPES:
        return None

    try:
        date = parse_date(_get("date"))
        price = parse_price(_get("price"))
    except ValueError as exc:
        raise RowRejected(str(exc), raw) from exc

    return PriceRecord(
        date=date,
        type=rice_type,
        category=category,
        price=price,
        unit=clean_label(_get("unit")) or DEFAULT_UNIT,
    )


def normalize_rows(
    rows: Iterable[Mapping[Any, Any]],
    source: str = "rows",
) -> tuple[list[PriceRecord], LoadResult]:
    """Normalize every row; malformed rows are counted, never raised."""
    result = LoadResult(source=source)
    records: list[PriceRecord] = []
    resolved_cache: dict[tuple, dict[str, Any]] = {}

    for row in rows:
        key = tuple(row.keys())
        columns = resolved_cache.get(key)
        if columns is None:
            columns = resolved_cache[key] = resolve_columns(key)
        try:
            record = normalize_row(row, columns)
        except RowRejected:
            result.rejected += 1
            continue
        if record is None:
            result.skipped += 1
            continue
        records.append(record)

    result.accepted = len(records)
    return records, result
