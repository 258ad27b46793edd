#!/usr/bin/env python3
"""
RiceUp CLI — price lookups, forecasts, and the API server.

USAGE:
  python -m riceup.cli types                                # Types and categories
  python -m riceup.cli series                               # One line per series
  python -m riceup.cli stats --type LOCAL                   # Price statistics
  python -m riceup.cli predict LOCAL Special --weeks 4      # Forecast one series

  python -m riceup.cli serve                                # Start API server
  python -m riceup.cli serve --port 8000

  --data PATH   read prices from PATH instead of RICEUP_DATA_FILE
"""
from __future__ import annotations

import argparse
import os
import sys

from riceup.data.store import DataStore, open_store
from riceup.errors import RiceUpError


def _open(args) -> DataStore:
    return open_store(getattr(args, "data", None))


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  RICEUP — {title}")
    print("=" * 70)


def cmd_types(args):
    """List rice types and their categories."""
    from riceup.analytics.prices import available_types

    store = _open(args)
    _banner("AVAILABLE TYPES")
    for rice_type, categories in available_types(store).items():
        print(f"  {rice_type:<20}{', '.join(categories)}")
    print()


def cmd_series(args):
    """One line per (type, category) series."""
    from riceup.analytics.prices import series_overview

    store = _open(args)
    _banner("SERIES")
    print(f"  {'TYPE':<14}{'CATEGORY':<18}{'POINTS':>7}  {'FIRST':<12}{'LAST':<12}{'LAST PRICE':>11}")
    for row in series_overview(store):
        print(f"  {row['type']:<14}{row['category']:<18}{row['data_points']:>7}  "
              f"{row['first_date']:<12}{row['last_date']:<12}{row['last_price']:>11,.2f}")
    print()


def cmd_stats(args):
    """Print price statistics for an optional type/category filter."""
    from riceup.analytics.prices import price_statistics

    store = _open(args)
    stats = price_statistics(store, args.type, args.category)
    _banner("PRICE STATISTICS")
    print(f"  Filter:   {args.type or 'all'} / {args.category or 'all'}")
    print(f"  Records:  {stats['count']:,}")
    if not stats["count"]:
        print("  No matching records.\n")
        return
    low, high = stats["min_price_entry"], stats["max_price_entry"]
    print(f"  Average:  {stats['average_price']:,.2f}")
    print(f"  Min:      {stats['min_price']:,.2f}  ({low['type']} {low['category']}, {low['date']})")
    print(f"  Max:      {stats['max_price']:,.2f}  ({high['type']} {high['category']}, {high['date']})")
    print(f"  Period:   {stats['date_range']['start']} to {stats['date_range']['end']}\n")


def cmd_predict(args) -> int:
    """Forecast one series."""
    from riceup.analytics.prices import predict_price

    store = _open(args)
    try:
        result = predict_price(store, args.type, args.category, args.weeks)
    except RiceUpError as exc:
        print(f"  Prediction failed: {exc.message}")
        return 1

    _banner("PRICE FORECAST")
    print(f"  Series:     {result['type']} / {result['category']}")
    print(f"  Last:       {result['last_price']:,.2f} on {result['last_date']}")
    print(f"  Predicted:  {result['predicted_price']:,.2f} on {result['prediction_date']}")
    print(f"  Trend:      {result['trend']} (slope {result['slope']:+.4f} per step)")
    print(f"  Confidence: {result['confidence'] * 100:.1f}% over {result['data_points']} points\n")
    return 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    from pathlib import Path
    from riceup import config
    if args.data:
        # env for reload subprocesses, module attribute for this one
        os.environ["RICEUP_DATA_FILE"] = args.data
        config.DATA_FILE = Path(args.data)
    uvicorn.run("riceup.main:app", host="0.0.0.0", port=args.port, reload=args.reload)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="RiceUp — rice price lookups and forecasts",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", default=None, help="Price CSV (default: RICEUP_DATA_FILE)")
    subparsers = parser.add_subparsers(dest="command")

    types_parser = subparsers.add_parser("types", help="List types and categories")
    types_parser.set_defaults(func=cmd_types)

    series_parser = subparsers.add_parser("series", help="List series with their latest price")
    series_parser.set_defaults(func=cmd_series)

    stats_parser = subparsers.add_parser("stats", help="Price statistics")
    stats_parser.add_argument("--type", default=None, help="Rice type filter")
    stats_parser.add_argument("--category", default=None, help="Category filter")
    stats_parser.set_defaults(func=cmd_stats)

    predict_parser = subparsers.add_parser("predict", help="Forecast one series")
    predict_parser.add_argument("type", help="Rice type, e.g. LOCAL")
    predict_parser.add_argument("category", help="Category, e.g. Special")
    predict_parser.add_argument("--weeks", type=int, default=1, help="Weeks ahead, 1-52 (default 1)")
    predict_parser.set_defaults(func=cmd_predict)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
