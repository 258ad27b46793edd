"""
Row sources: the price CSV on disk and the embedded fallback dataset.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from riceup.config import DATA_FILE
from riceup.data.fallback import fallback_rows
from riceup.errors import DataSourceUnavailable


def read_csv_rows(filepath: Path = DATA_FILE) -> tuple[list[dict], int]:
    """Read a price CSV into raw row dicts, every value kept as text.

    Returns the rows plus the number of lines dropped for having more fields
    than the header. Column names are left untouched; resolving them is the
    normalizer's job. Raises DataSourceUnavailable when the file cannot be
    read at all.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise DataSourceUnavailable(f"Price file not found: {filepath}", str(filepath))

    bad_lines = 0

    def _count_bad_line(fields: list[str]) -> None:
        nonlocal bad_lines
        bad_lines += 1
        return None

    try:
        df = pd.read_csv(
            filepath,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=_count_bad_line,
        )
    except pd.errors.EmptyDataError:
        # Header-less empty file: readable, just nothing in it
        return [], 0
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DataSourceUnavailable(f"Could not read {filepath.name}: {exc}", str(filepath)) from exc

    return df.to_dict(orient="records"), bad_lines


def read_fallback_rows() -> list[dict]:
    """Raw rows of the embedded sample dataset."""
    return fallback_rows()
