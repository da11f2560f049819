#!/usr/bin/env python3
"""
Toll Analytics CLI — analyze a toll export from the terminal, or start the API server.

USAGE:
  python -m toll_analytics.cli analyze tolls.csv                          # All-time report
  python -m toll_analytics.cli analyze tolls.xlsx --period month --anchor 2024-01-15
  python -m toll_analytics.cli analyze tolls.csv --period custom --start 2024-01-01 --end 2024-01-31
  python -m toll_analytics.cli analyze tolls.csv --tags "1234,5678"       # Only matching transponders
  python -m toll_analytics.cli analyze tolls.csv --day 2024-01-03          # Drill into one day
  python -m toll_analytics.cli analyze tolls.csv --json                    # Raw JSON output

  python -m toll_analytics.cli serve                                      # Start API server
  python -m toll_analytics.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import datetime as dt
import json
import os
import sys
from pathlib import Path

from toll_analytics.analytics.common import format_currency
from toll_analytics.analytics.dashboard import analyze
from toll_analytics.data.schemas import PeriodFilter, PeriodType
from toll_analytics.data.loader import load_records
from toll_analytics.exceptions import FormatError


def _date_arg(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def _build_period(args) -> PeriodFilter:
    """Build a PeriodFilter from CLI args."""
    return PeriodFilter(
        period_type=PeriodType(args.period),
        anchor=args.anchor,
        start_date=args.start,
        end_date=args.end,
    )


def _print_report(report: dict) -> None:
    print("\n" + "=" * 70)
    print(f"  TOLL EXPENSE REPORT — {report['period']['label']}")
    print("=" * 70)

    if report["empty"]:
        print(f"\n  {report['message']}\n")
        return

    travel = report["travel_summary"]
    journeys = report["journeys"]
    rate = report["weekly_rate"]
    print(f"\n  Total toll expenses: {format_currency(report['total_expenses'])}")
    print(f"  Transactions:        {report['transaction_count']:,}")
    print(f"  Inferred journeys:   {journeys['total_journeys']:,}")
    print(f"  Weeks in period:     ~{travel['weeks_in_period']:.1f}")
    print(f"  Average:             {rate['per_week']:.1f} {rate['unit']} per week")
    if travel["busiest_weekday"]:
        print(f"  Busiest weekday:     {travel['busiest_weekday']}")

    print(f"\n  VEHICLES ({len(report['by_vehicle'])}):")
    for v in report["by_vehicle"]:
        vid = v["vehicle_id"] or "—"
        print(f"    {v['display_name']:<12}{vid[:24]:<26}{v['count']:>6}  "
              f"{format_currency(v['total']):>12}  {v['percent_of_total']:5.1f}%")

    print(f"\n  TOP TOLL LOCATIONS:")
    for i, loc in enumerate(report["top_locations"], 1):
        print(f"    {i:<4}{loc['location'][:40]:<42}{loc['count']:>6}  {format_currency(loc['total']):>12}")

    print(f"\n  DAILY TREND:")
    for point in report["daily_trend"]:
        print(f"    {point['day']}  {point['count']:>4}  {format_currency(point['total']):>12}")

    day = report["selected_day"]
    if day:
        print(f"\n  TRAVEL DETAILS FOR {day['label'].upper()}:")
        print(f"    {day['count']} toll transaction(s) across {len(day['locations'])} location(s) "
              f"· {format_currency(day['total'])} total")
        for t in day["transactions"]:
            print(f"    {t['time']:>9}  {t['location'][:30]:<32}{t['vehicle']:<12}{format_currency(t['amount']):>10}")

    fuel = report["fuel_estimate"]
    if fuel:
        print(f"\n  FUEL ESTIMATE:")
        print(f"    {fuel['total_miles']:,.0f} miles · {fuel['gallons']:,.1f} gal · "
              f"${fuel['cost']:,.2f} total · ${fuel['weekly_cost']:,.2f}/week")
    print()


def cmd_analyze(args):
    """Normalize one file and print the report."""
    path = Path(args.file)
    if not path.is_file():
        print(f"  File not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        records = load_records(path.read_bytes(), path.name)
    except FormatError as exc:
        print(f"  Could not read {path.name}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not args.json:
        print(f"  Loaded {len(records):,} rows from {path.name}")

    report = analyze(
        records,
        _build_period(args),
        tags=args.tags,
        display_range=(args.range_start, args.range_end) if (args.range_start or args.range_end) else None,
        selected_day=args.day,
        miles_per_trip=args.miles_per_trip,
        mpg=args.mpg,
        gas_price=args.gas_price,
    )

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        _print_report(report)


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Toll Analytics API on port {args.port}...")
    uvicorn.run("toll_analytics.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Toll Analytics — toll transaction spending analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a toll CSV/Excel export")
    analyze_parser.add_argument("file", help="CSV, XLSX or XLS file")
    analyze_parser.add_argument("--period", default="all", choices=[p.value for p in PeriodType], help="Period type")
    analyze_parser.add_argument("--anchor", type=_date_arg, help="Date inside the month/quarter/year")
    analyze_parser.add_argument("--start", type=_date_arg, help="Custom range start")
    analyze_parser.add_argument("--end", type=_date_arg, help="Custom range end")
    analyze_parser.add_argument("--tags", help="Transponder substrings (comma/space separated)")
    analyze_parser.add_argument("--range-start", type=_date_arg, help="Zoom into the period from this day")
    analyze_parser.add_argument("--range-end", type=_date_arg, help="Zoom into the period up to this day")
    analyze_parser.add_argument("--day", type=_date_arg, help="Show travel details for one day")
    analyze_parser.add_argument("--miles-per-trip", help="Average miles per trip (fuel estimate)")
    analyze_parser.add_argument("--mpg", help="Vehicle MPG (fuel estimate)")
    analyze_parser.add_argument("--gas-price", help="Gas price per gallon (fuel estimate)")
    analyze_parser.add_argument("--json", action="store_true", help="Print the raw JSON report")
    analyze_parser.set_defaults(func=cmd_analyze)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
