"""
Price forecasting — ordinary least-squares trend over one series.

The time axis is the observation's position in the date-ordered series
(0, 1, 2, ...), so one step is one observation regardless of calendar gaps.
A forecast ``weeks_ahead`` steps out is labelled with the date
``weeks_ahead * 7`` days after the last observation.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, asdict

import numpy as np
import pandas as pd

from riceup.config import MIN_DATA_POINTS, PREDICTION_BAND, TREND_EPSILON, PRICE_DECIMALS
from riceup.errors import InsufficientData


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    r_squared: float

    def predict(self, t: float) -> float:
        return self.slope * t + self.intercept


@dataclass(frozen=True)
class Forecast:
    """Bounded price projection for one series."""
    predicted_price: float
    prediction_date: dt.date
    confidence: float
    data_points: int
    trend: str
    slope: float
    intercept: float
    last_price: float
    last_date: dt.date

    def to_dict(self) -> dict:
        data = asdict(self)
        data["prediction_date"] = self.prediction_date.isoformat()
        data["last_date"] = self.last_date.isoformat()
        return data


def fit_linear(t: np.ndarray, y: np.ndarray) -> LinearFit:
    """Closed-form OLS: slope = cov(t, y) / var(t).

    R² is left unclamped here; NaN when it is undefined (constant y).
    """
    t = np.asarray(t, dtype=float)
    y = np.asarray(y, dtype=float)
    t_mean, y_mean = t.mean(), y.mean()
    var_t = float(np.sum((t - t_mean) ** 2))
    if var_t == 0:
        raise InsufficientData("Cannot fit a trend through a single point in time",
                               found=len(t), required=MIN_DATA_POINTS)

    slope = float(np.sum((t - t_mean) * (y - y_mean)) / var_t)
    intercept = float(y_mean - slope * t_mean)

    ss_res = float(np.sum((y - (slope * t + intercept)) ** 2))
    ss_tot = float(np.sum((y - y_mean) ** 2))
    if ss_tot <= 1e-12:
        r_squared = 1.0 if ss_res <= 1e-12 else float("nan")
    else:
        r_squared = 1.0 - ss_res / ss_tot
    return LinearFit(slope=slope, intercept=intercept, r_squared=r_squared)


def clamp_confidence(r_squared: float) -> float:
    """R² squeezed into [0, 1]; undefined values count as no confidence."""
    if np.isnan(r_squared):
        return 0.0
    return float(min(1.0, max(0.0, r_squared)))


def bound_prediction(raw: float, last_price: float, band: float = PREDICTION_BAND) -> float:
    """Keep a prediction within ±band of the last observed price, never negative."""
    lower = last_price * (1 - band)
    upper = last_price * (1 + band)
    return max(0.0, min(upper, max(lower, raw)))


def classify_trend(slope: float, epsilon: float = TREND_EPSILON) -> str:
    if abs(slope) <= epsilon:
        return "stable"
    return "upward" if slope > 0 else "downward"


def forecast_series(series: pd.DataFrame, weeks_ahead: int = 1) -> Forecast:
    """Project the price ``weeks_ahead`` steps past the last observation.

    ``series`` must be date-ordered with positive prices (see select_series).
    """
    n = len(series)
    if n < MIN_DATA_POINTS:
        raise InsufficientData(
            f"Not enough data for prediction. Only {n} records found",
            found=n, required=MIN_DATA_POINTS,
        )

    prices = series["price"].to_numpy(dtype=float)
    t = np.arange(n, dtype=float)
    fit = fit_linear(t, prices)

    last_price = float(prices[-1])
    last_date = series["date"].iloc[-1]
    raw = fit.predict(t[-1] + weeks_ahead)

    return Forecast(
        predicted_price=round(bound_prediction(raw, last_price), PRICE_DECIMALS),
        prediction_date=last_date + dt.timedelta(days=7 * weeks_ahead),
        confidence=clamp_confidence(fit.r_squared),
        data_points=n,
        trend=classify_trend(fit.slope),
        slope=round(fit.slope, 6),
        intercept=round(fit.intercept, 6),
        last_price=last_price,
        last_date=last_date,
    )
