"""
Error taxonomy shared by the loader, the forecaster and the API layer.
"""
from __future__ import annotations

from typing import Any


class RiceUpError(Exception):
    """Base error. ``status_code`` is what the API layer answers with."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RowRejected(RiceUpError):
    """One malformed input row. Counted and dropped during load, never fatal."""

    status_code = 422

    def __init__(self, message: str, row: dict | None = None):
        super().__init__(message, {"row": row} if row is not None else None)
        self.row = row


class DataSourceUnavailable(RiceUpError):
    """The row source could not be read at all (missing or unreadable file)."""

    status_code = 503

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message, {"source": source} if source else None)
        self.source = source


class InsufficientData(RiceUpError):
    """Fewer valid observations than a forecast needs."""

    status_code = 400

    def __init__(self, message: str, found: int = 0, required: int = 2):
        super().__init__(message, {"found": found, "required": required})
        self.found = found
        self.required = required


class InvalidRequest(RiceUpError):
    """Caller-supplied parameters failed validation."""

    status_code = 400
