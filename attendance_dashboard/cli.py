#!/usr/bin/env python3
"""Command-line interface for the attendance dashboard.

Commands:
  - attendance-dashboard report   : Build the dashboard for a month (JSON)
  - attendance-dashboard months   : List months with data and the default month
  - attendance-dashboard missing  : List locations missing weekday entries

Typical usage:
  attendance-dashboard report --source attendance.xlsx --month 2024-03
  attendance-dashboard missing --source attendance.xlsx
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from attendance_dashboard.configs.settings import get_settings
from attendance_dashboard.monitoring.logging import LoggingOptions, setup_logging
from attendance_dashboard.pipeline import DashboardPipeline, build_pipeline


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="attendance-dashboard", description="Attendance Dashboard CLI")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--config", "-c", default=None, help="Path to dashboard YAML config")
    p.add_argument("--source", "-s", default=None, help="Path to the .xlsx workbook")
    p.add_argument("--sheet", default=None, help="Sheet name (default from settings)")
    p.add_argument("--log-level", default=None, help="Log level (default from settings)")
    p.add_argument("--json-logs", action="store_true", help="Emit JSON logs")
    sub = p.add_subparsers(dest="cmd")

    # report
    pr = sub.add_parser("report", help="Build the dashboard for a month")
    pr.add_argument("--month", "-m", default=None, help="Month to display (yyyy-MM)")
    pr.add_argument("--indent", type=int, default=2, help="JSON indent")

    # months
    sub.add_parser("months", help="List months with data")

    # missing
    pm = sub.add_parser("missing", help="List locations missing weekday entries")
    pm.add_argument("--month", "-m", default=None, help="Month to check (yyyy-MM)")

    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI with the given arguments."""
    try:
        return _main_impl(argv)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _main_impl(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.version:
        from attendance_dashboard import __version__

        print(f"attendance-dashboard version {__version__}")
        return 0

    if not args.cmd:
        print("Error: Command required. Use --help for usage info.", file=sys.stderr)
        return 1

    settings = get_settings()
    setup_logging(
        LoggingOptions(
            level=args.log_level or settings.LOG_LEVEL,
            json_logs=args.json_logs or settings.JSON_LOGS,
        )
    )

    pipeline = build_pipeline(
        settings,
        source_path=Path(args.source) if args.source else None,
        sheet_name=args.sheet,
        config_path=args.config,
    )
    with pipeline.source:
        return _dispatch(args, pipeline)


def _dispatch(args: argparse.Namespace, pipeline: DashboardPipeline) -> int:
    if args.cmd == "report":
        result = pipeline.run(args.month)
        print(result.model_dump_json(indent=args.indent))
        return 0 if result.ok else 1

    if args.cmd == "months":
        listing = pipeline.available_months()
        print(json.dumps(listing.model_dump(), indent=2, ensure_ascii=False))
        return 0 if listing.error is None else 1

    if args.cmd == "missing":
        entries = pipeline.find_missing_entries(args.month)
        if not entries:
            print("No missing entries.")
        for entry in entries:
            print(entry)
        return 0

    print(f"Error: Unknown command '{args.cmd}'", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
