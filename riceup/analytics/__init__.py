"""Price queries, series selection, and forecasting."""
