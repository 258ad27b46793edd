"""
Record and filter schemas for price queries.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from riceup.config import DEFAULT_UNIT

# Column order of the DataStore frame
RECORD_COLUMNS = ["date", "type", "category", "price", "unit"]

# Filter values that mean "no filter"
_WILDCARDS = {"", "all", "*"}


@dataclass(frozen=True)
class PriceRecord:
    """One observed price point."""
    date: dt.date
    type: str
    category: str
    price: float
    unit: str = DEFAULT_UNIT

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "type": self.type,
            "category": self.category,
            "price": self.price,
            "unit": self.unit,
        }


@dataclass
class LoadResult:
    """Outcome of one load: how many rows made it into the store."""
    accepted: int = 0
    rejected: int = 0
    skipped: int = 0          # merge-conflict residue, excluded types
    duplicates: int = 0       # superseded by a later row for the same date/series
    source: str = "rows"

    @property
    def total(self) -> int:
        return self.accepted + self.rejected + self.skipped + self.duplicates

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "rejected": self.rejected,
            "skipped": self.skipped,
            "duplicates": self.duplicates,
            "source": self.source,
        }


@dataclass
class PriceFilter:
    """Optional type/category restriction for historical and stats queries."""
    type: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self) -> None:
        self.type = _clean_filter_value(self.type)
        self.category = _clean_filter_value(self.category)


def _clean_filter_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if value.lower() in _WILDCARDS:
        return None
    return value
