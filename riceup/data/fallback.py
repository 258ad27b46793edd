"""
Embedded sample dataset, served when the price CSV cannot be read.

Monthly PHP/kg retail prices, January to June 2024.
"""
from __future__ import annotations

FALLBACK_DATES = [
    "2024-01-01", "2024-02-01", "2024-03-01",
    "2024-04-01", "2024-05-01", "2024-06-01",
]

FALLBACK_PRICES = {
    ("KADIWA", "Premium"):         [43.00, 43.00, 43.00, 43.00, 43.00, 43.00],
    ("KADIWA", "Well_Milled"):     [40.00, 38.00, 35.00, 35.00, 35.00, 35.00],
    ("KADIWA", "Regular_Milled"):  [33.00, 33.00, 33.00, 33.00, 33.00, 33.00],
    ("KADIWA", "P20"):             [24.50, 20.00, 20.00, 20.00, 20.00, 20.00],
    ("LOCAL", "Special"):          [61.05, 61.19, 61.03, 60.90, 60.79, 60.62],
    ("LOCAL", "Premium"):          [55.02, 55.21, 55.37, 55.46, 55.01, 54.81],
    ("LOCAL", "Well_Milled"):      [50.90, 52.05, 51.94, 52.16, 51.53, 51.46],
    ("LOCAL", "Regular_Milled"):   [51.83, 50.96, 49.67, 49.86, 49.41, 48.88],
    ("IMPORTED", "Special"):       [61.04, 61.00, 60.95, 60.28, 60.57, 60.59],
    ("IMPORTED", "Premium"):       [57.45, 57.70, 57.90, 57.74, 57.39, 57.13],
    ("IMPORTED", "Well_Milled"):   [53.67, 54.26, 53.77, 52.68, 52.89, 53.50],
    ("IMPORTED", "Regular_Milled"): [50.40, 50.00, 49.48, 49.63, 49.74, 49.85],
}


def fallback_rows() -> list[dict]:
    """Sample rows shaped like the CSV export, ready for the normalizer."""
    rows = []
    for (rice_type, category), prices in FALLBACK_PRICES.items():
        for date, price in zip(FALLBACK_DATES, prices):
            rows.append({
                "date": date,
                "type": rice_type,
                "category": category,
                "price": f"{price:.2f}",
                "unit": "PHP/kg",
            })
    return rows
