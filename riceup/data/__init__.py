"""Row sources, normalization, and the in-memory price store."""
from .loader import read_csv_rows, read_fallback_rows
from .store import DataStore
from .schemas import PriceRecord, PriceFilter, LoadResult
from .normalize import normalize_row, normalize_rows, resolve_columns
