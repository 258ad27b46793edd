"""
RiceUp — Configuration: paths, column aliases, forecast constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with RICEUP_DATA_DIR / RICEUP_DATA_FILE for deployment
# ---------------------------------------------------------------------------
_project_dir = Path(__file__).resolve().parent.parent
_data_dir = Path(os.environ.get("RICEUP_DATA_DIR", str(_project_dir / "data")))
DATA_DIR = _data_dir
DATA_FILE = Path(os.environ.get("RICEUP_DATA_FILE", str(_data_dir / "rice_prices.csv")))

# Load the embedded dataset when DATA_FILE cannot be read ("0" starts empty)
USE_FALLBACK = os.environ.get("RICEUP_USE_FALLBACK", "1").strip().lower() not in ("0", "false", "no", "off")

# ---------------------------------------------------------------------------
# Column resolution: aliases matched case-insensitively as substrings of the
# column name. Fields are resolved in this order; a column claimed by one
# field is never reused by a later one.
# ---------------------------------------------------------------------------
COLUMN_ALIASES = {
    "date": ["date", "petsa", "fecha"],
    "price": ["price", "presyo", "halaga"],
    "unit": ["unit", "yunit"],
    "category": ["category", "kategorya", "class", "grade"],
    "type": ["type", "uri", "market", "source"],
}

# Last resort when no alias matches: 1st=date, 2nd=type, 3rd=category, 4th=price
POSITIONAL_FIELDS = ["date", "type", "category", "price"]

# Leftovers from an unresolved git merge inside the CSV
CONFLICT_MARKERS = ("<<<<<<<", "=======", ">>>>>>>")

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
]

DEFAULT_UNIT = "PHP/kg"

# ---------------------------------------------------------------------------
# Type normalization map
# ---------------------------------------------------------------------------
TYPE_NORMALIZATION = {
    "KADIWA_RICE_FOR_ALL": "KADIWA",
    "KADIWA RICE FOR ALL": "KADIWA",
}

# NFA rice is a government buffer-stock price, not a market observation
EXCLUDED_TYPES = {"NFA_RICE"}

# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------
HISTORICAL_LIMIT = 100
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500

# ---------------------------------------------------------------------------
# Forecasting
# ---------------------------------------------------------------------------
MIN_WEEKS_AHEAD = 1
MAX_WEEKS_AHEAD = 52
MIN_DATA_POINTS = 2

# Predictions are clamped to last_price * (1 ± PREDICTION_BAND)
PREDICTION_BAND = 0.5

# |slope| (PHP/kg per observation) at or below this is reported as "stable"
TREND_EPSILON = 0.001

PRICE_DECIMALS = 2
