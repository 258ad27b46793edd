import datetime as dt

import pytest

from riceup.data.schemas import PriceFilter
from riceup.data.store import DataStore, to_records


def test_load_rejects_zero_price(small_store):
    result = small_store.last_result
    assert result.accepted == 4
    assert result.rejected == 1
    assert small_store.row_count() == 4
    assert (small_store.df["price"] > 0).all()


def test_load_sets_last_update(small_store):
    assert small_store.is_loaded
    assert isinstance(small_store.last_update, dt.datetime)


def test_load_replaces_previous_dataset(small_store):
    small_store.load([{"date": "2025-01-01", "type": "LOCAL", "category": "Special", "price": "62.00"}])
    assert small_store.row_count() == 1
    assert small_store.types() == ["LOCAL"]


def test_duplicates_resolved_last_write_wins():
    store = DataStore()
    result = store.load([
        {"date": "2024-01-01", "type": "LOCAL", "category": "Special", "price": "50.00"},
        {"date": "2024-01-01", "type": "LOCAL", "category": "Special", "price": "52.00"},
    ])
    assert result.accepted == 1
    assert result.duplicates == 1
    assert store.df["price"].tolist() == [52.0]


def test_types_index(fallback_store):
    index = fallback_store.types_index()
    assert list(index) == ["IMPORTED", "KADIWA", "LOCAL"]
    assert index["KADIWA"] == ["P20", "Premium", "Regular_Milled", "Well_Milled"]
    assert index["LOCAL"] == ["Premium", "Regular_Milled", "Special", "Well_Milled"]


def test_current_slice_is_latest_date_only(small_store):
    df, as_of = small_store.current_slice()
    assert as_of == dt.date(2024, 6, 1)
    assert len(df) == 2
    assert set(df["date"]) == {dt.date(2024, 6, 1)}


def test_current_slice_empty_store():
    df, as_of = DataStore().current_slice()
    assert df.empty
    assert isinstance(as_of, dt.datetime)


def test_historical_filter_by_type_newest_first(fallback_store):
    df, total, pagination = fallback_store.historical_slice(PriceFilter(type="LOCAL"))
    assert pagination is None
    assert total == 24
    assert set(df["type"]) == {"LOCAL"}
    dates = df["date"].tolist()
    assert all(a >= b for a, b in zip(dates, dates[1:]))
    assert dates[0] == dt.date(2024, 6, 1)


def test_historical_single_series_strictly_descending(fallback_store):
    df, _, _ = fallback_store.historical_slice(PriceFilter("LOCAL", "Special"))
    dates = df["date"].tolist()
    assert all(a > b for a, b in zip(dates, dates[1:]))


def test_historical_all_means_no_filter(fallback_store):
    df, total, _ = fallback_store.historical_slice(PriceFilter("all", "all"))
    assert total == 72
    assert len(df) == 72


def test_historical_limit(fallback_store):
    df, total, _ = fallback_store.historical_slice(limit=5)
    assert len(df) == 5
    assert total == 72


def test_historical_pagination(fallback_store):
    df, total, pagination = fallback_store.historical_slice(page=2, page_size=20)
    assert len(df) == 20
    assert total == 72
    assert pagination == {
        "page": 2, "page_size": 20, "total_pages": 4, "has_next": True, "has_prev": True,
    }

    last, _, pagination = fallback_store.historical_slice(page=4, page_size=20)
    assert len(last) == 12
    assert pagination["has_next"] is False


def test_statistics_for_series(fallback_store):
    stats = fallback_store.statistics(PriceFilter("LOCAL", "Special"))
    assert stats["count"] == 6
    assert stats["average_price"] == pytest.approx(60.93)
    assert stats["min_price"] == 60.62
    assert stats["max_price"] == 61.19
    assert stats["min_price_entry"].date == dt.date(2024, 6, 1)
    assert stats["max_price_entry"].date == dt.date(2024, 2, 1)
    assert stats["date_range"] == {"start": dt.date(2024, 1, 1), "end": dt.date(2024, 6, 1)}


def test_statistics_empty_filter_returns_zeros(fallback_store):
    stats = fallback_store.statistics(PriceFilter(category="NoSuchCategory"))
    assert stats["count"] == 0
    assert stats["average_price"] == 0.0
    assert stats["min_price_entry"] is None
    assert stats["date_range"] == {"start": None, "end": None}


def test_reads_are_idempotent(fallback_store):
    first = to_records(fallback_store.historical_slice(PriceFilter(type="IMPORTED"))[0])
    second = to_records(fallback_store.historical_slice(PriceFilter(type="IMPORTED"))[0])
    assert first == second
    assert fallback_store.statistics() == fallback_store.statistics()
    assert fallback_store.row_count() == 72
