"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    """Every response: {success, data} or {success, error}."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class PredictRequest(BaseModel):
    # Loose types: the query layer validates and answers 400
    type: Optional[str] = None
    category: Optional[str] = None
    weeks_ahead: Any = 1
