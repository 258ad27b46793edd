"""
FastAPI dependencies — DataStore singleton, response envelope.
"""
from __future__ import annotations

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from riceup.analytics.common import sanitize_for_json
from riceup.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


def get_store_or_empty() -> DataStore:
    """Return the store even if nothing has been loaded (for health checks)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

def ok(data) -> JSONResponse:
    return JSONResponse(content={"success": True, "data": sanitize_for_json(data)})


def fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})
