"""
JSON helpers used by the query functions and the API layer.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd

from riceup.data.schemas import PriceRecord


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas/date types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple, set)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, PriceRecord):
        return obj.to_dict()
    if isinstance(obj, (dt.date, dt.datetime)):
        return obj.isoformat()
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj


def records_payload(records: list[PriceRecord]) -> list[dict]:
    """PriceRecords as JSON-ready dicts."""
    return [r.to_dict() for r in records]
