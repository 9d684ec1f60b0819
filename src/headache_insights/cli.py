"""CLI entry point for generating the headache dashboard report."""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from .config import get_settings
from .errors import HeadacheInsightsError
from .formatter import DashboardTextFormatter
from .loader import load_records
from .logging import setup_logging
from .report import DashboardReportGenerator


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def report(argv: list[str] | None = None) -> None:
    """CLI entry point for the dashboard report.

    Usage:
        headache-report --data entries.json [--today 2024-01-15] [--json]
    """
    settings = get_settings()
    setup_logging(settings.app)

    parser = argparse.ArgumentParser(
        description="Summarize a headache journal export into risk and insights"
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path(settings.report.data_path),
        help=f"Entry export JSON file (default: {settings.report.data_path})",
    )
    parser.add_argument(
        "--today",
        type=parse_date,
        default=None,
        help=f"Reference date (YYYY-MM-DD, default: today in {settings.report.timezone})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="format_json",
        default=settings.report.output_format == "json",
        help="Output as JSON",
    )

    args = parser.parse_args(argv)
    today = args.today or datetime.now(ZoneInfo(settings.report.timezone)).date()

    try:
        records = load_records(args.data)
    except (FileNotFoundError, HeadacheInsightsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    dashboard = DashboardReportGenerator().generate(records, today)

    if args.format_json:
        print(json.dumps(dashboard.to_dict(), indent=2))
    else:
        print(DashboardTextFormatter().format(dashboard))
