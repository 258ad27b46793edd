import datetime as dt

import numpy as np
import pytest

from conftest import make_rows
from riceup.analytics.forecast import (
    fit_linear, forecast_series, bound_prediction, classify_trend, clamp_confidence,
)
from riceup.analytics.series import select_series, series_keys
from riceup.data.store import DataStore
from riceup.errors import InsufficientData


def _series(prices, **kwargs):
    store = DataStore()
    store.load(make_rows("LOCAL", "Special", prices, **kwargs))
    return select_series(store, "LOCAL", "Special")


def test_select_series_sorted_and_filtered():
    store = DataStore()
    store.load([
        {"date": "2024-03-01", "type": "LOCAL", "category": "Special", "price": "61.03"},
        {"date": "2024-01-01", "type": "LOCAL", "category": "Special", "price": "61.05"},
        {"date": "2024-02-01", "type": "LOCAL", "category": "Premium", "price": "55.21"},
    ])
    series = select_series(store, "LOCAL", "Special")
    assert series["date"].tolist() == [dt.date(2024, 1, 1), dt.date(2024, 3, 1)]
    assert select_series(store, "LOCAL", "Nope").empty


def test_series_keys(fallback_store):
    keys = series_keys(fallback_store)
    assert len(keys) == 12
    assert keys[0] == ("IMPORTED", "Premium")


def test_fit_linear_exact_line():
    t = np.arange(10, dtype=float)
    fit = fit_linear(t, 50 + 0.1 * t)
    assert fit.slope == pytest.approx(0.1)
    assert fit.intercept == pytest.approx(50.0)
    assert fit.r_squared == pytest.approx(1.0)


def test_fit_linear_noisy_r_squared_below_one():
    fit = fit_linear(np.arange(4, dtype=float), np.array([1.0, 3.0, 2.0, 4.0]))
    assert fit.slope == pytest.approx(0.8)
    assert 0 < fit.r_squared < 1
    assert fit.r_squared == pytest.approx(0.64)


def test_linear_series_extrapolates_exactly():
    forecast = forecast_series(_series([50 + 0.1 * t for t in range(10)]), weeks_ahead=1)
    assert forecast.confidence == pytest.approx(1.0)
    assert forecast.predicted_price == pytest.approx(51.0)
    assert forecast.trend == "upward"
    assert forecast.data_points == 10
    assert forecast.slope == pytest.approx(0.1)


def test_upper_bound_clamps_runaway_prediction():
    forecast = forecast_series(_series([10.0, 100.0]), weeks_ahead=4)
    assert forecast.predicted_price == 150.0


def test_lower_bound_clamps_runaway_prediction():
    forecast = forecast_series(_series([100.0, 10.0]), weeks_ahead=4)
    assert forecast.predicted_price == 5.0
    assert forecast.trend == "downward"


@pytest.mark.parametrize("prices", [[], [61.05]])
def test_fewer_than_two_points_is_insufficient(prices):
    with pytest.raises(InsufficientData):
        forecast_series(_series(prices), weeks_ahead=1)


def test_two_point_series_end_to_end():
    store = DataStore()
    store.load([
        {"date": "2024-01-01", "type": "LOCAL", "category": "Special", "price": "61.05"},
        {"date": "2024-02-01", "type": "LOCAL", "category": "Special", "price": "61.19"},
    ])
    forecast = forecast_series(select_series(store, "LOCAL", "Special"), weeks_ahead=4)
    assert 30.5 <= forecast.predicted_price <= 91.7
    assert forecast.predicted_price == pytest.approx(61.75, abs=0.01)
    assert forecast.data_points == 2
    assert forecast.trend == "upward"
    assert forecast.prediction_date == dt.date(2024, 2, 29)


def test_constant_series_is_stable_with_full_confidence():
    forecast = forecast_series(_series([43.0] * 6), weeks_ahead=8)
    assert forecast.predicted_price == 43.0
    assert forecast.trend == "stable"
    assert forecast.confidence == 1.0


def test_prediction_date_counts_weeks_from_last_observation():
    forecast = forecast_series(_series([40.0, 38.0, 35.0], start="2024-01-01", step_days=31), weeks_ahead=2)
    assert forecast.last_date == dt.date(2024, 3, 3)
    assert forecast.prediction_date == dt.date(2024, 3, 17)


def test_helpers():
    assert bound_prediction(-20.0, 10.0) == 5.0
    assert bound_prediction(12.0, 10.0) == 12.0
    assert bound_prediction(40.0, 10.0) == 15.0
    assert classify_trend(0.0005) == "stable"
    assert classify_trend(-0.0005) == "stable"
    assert classify_trend(-0.5) == "downward"
    assert clamp_confidence(-0.3) == 0.0
    assert clamp_confidence(float("nan")) == 0.0
    assert clamp_confidence(1.2) == 1.0


def test_forecast_to_dict_is_json_ready():
    data = forecast_series(_series([61.05, 61.19]), weeks_ahead=1).to_dict()
    assert set(data) >= {"predicted_price", "prediction_date", "confidence", "data_points", "trend", "slope"}
    assert isinstance(data["prediction_date"], str)
