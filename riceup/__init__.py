"""RiceUp: rice market prices and short-horizon forecasts."""

__version__ = "1.0.0"
