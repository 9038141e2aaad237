#!/usr/bin/env python3
"""
CLI for edgar-risk-panel

Usage:
  edgar-risk-panel list-filings 320193                       # 10-K filings, one per year
  edgar-risk-panel list-filings 320193 --start 2018 --end 2023
  edgar-risk-panel fetch 320193 --year 2023                  # Download primary document
  edgar-risk-panel extract 320193 --year 2023 --mdna         # Show Item 1A / Item 7
  edgar-risk-panel score 320193 --year 2023                  # Dictionary measures
  edgar-risk-panel build-panel --firms firms.csv             # Full panel → CSV
  edgar-risk-panel build-panel 320193 789019 --start 2015

Configuration comes from EDGAR_* environment variables (see config.py);
EDGAR_USER_AGENT must identify you to SEC.gov.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .adapters.mcp import MCPHandlers
from .config import Settings, load_settings
from .container import Container
from .formatters import (
    format_build_panel,
    format_extract_sections,
    format_fetch_document,
    format_list_filings,
    format_score_filing,
)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


def configure_logging(verbose: int) -> None:
    level = logging.WARNING if verbose == 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def run_command(settings: Settings, args: argparse.Namespace) -> int:
    """Dispatch a parsed command to its handler and print the formatted result"""
    async with Container(settings) as container:
        handlers = MCPHandlers(container)

        if args.command == "list-filings":
            result = await handlers.list_filings(args.cik, args.start, args.end)
            print(format_list_filings(result))
        elif args.command == "fetch":
            result = await handlers.fetch_document(args.cik, args.accession, args.year, args.force)
            print(format_fetch_document(result))
        elif args.command == "extract":
            result = await handlers.extract_sections(args.cik, args.accession, args.year, args.mdna)
            print(format_extract_sections(result))
        elif args.command == "score":
            result = await handlers.score_filing(args.cik, args.accession, args.year)
            print(format_score_filing(result))
        elif args.command == "build-panel":
            result = await handlers.build_panel(
                ciks=args.ciks,
                firms_csv=args.firms,
                start_year=args.start,
                end_year=args.end,
                output_path=args.output
            )
            print(format_build_panel(result))
        else:
            raise ValueError(f"Unknown command: {args.command}")

    return 0 if result["success"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="edgar-risk-panel - 10-K risk-factor text measures from SEC EDGAR"
    )
    parser.add_argument("--data-dir", help="Data root (default: $EDGAR_DATA_DIR or ./data)")
    parser.add_argument("--user-agent", help="SEC User-Agent (default: $EDGAR_USER_AGENT)")
    parser.add_argument("--min-interval", type=float, help="Seconds between SEC requests (default: 0.2)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list-filings", help="List 10-K filings (one per year)")
    list_parser.add_argument("cik", help="Firm CIK (e.g., 320193)")
    list_parser.add_argument("--start", type=int, help="First filing year")
    list_parser.add_argument("--end", type=int, help="Last filing year")

    for name, help_text in (
        ("fetch", "Download a filing's primary document"),
        ("extract", "Extract Item 1A (and Item 7) from a filing"),
        ("score", "Score a filing's Item 1A"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("cik", help="Firm CIK (e.g., 320193)")
        sub.add_argument("--accession", help="Accession number (e.g., 0000320193-23-000106)")
        sub.add_argument("--year", type=int, help="Filing year (default: latest in range)")
        if name == "fetch":
            sub.add_argument("--force", action="store_true", help="Re-download even if cached")
        if name == "extract":
            sub.add_argument("--mdna", action="store_true", help="Also extract Item 7")

    panel_parser = subparsers.add_parser("build-panel", help="Build the firm-year panel CSV")
    panel_parser.add_argument("ciks", nargs="*", help="Firm CIKs (or use --firms)")
    panel_parser.add_argument("--firms", help="CSV with a 'cik' column (optional 'ticker', 'name')")
    panel_parser.add_argument("--start", type=int, help="First filing year")
    panel_parser.add_argument("--end", type=int, help="Last filing year")
    panel_parser.add_argument("--output", help="Output CSV (default: <output-dir>/risk_panel.csv)")

    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """CLI flags win over environment values"""
    if args.data_dir:
        data_dir = Path(args.data_dir)
        settings = replace(
            settings,
            data_dir=data_dir,
            raw_dir=data_dir / "raw",
            dict_dir=data_dir / "dictionaries",
            output_dir=data_dir / "output",
        )
    if args.user_agent:
        settings = replace(settings, user_agent=args.user_agent)
    if args.min_interval is not None:
        settings = replace(settings, min_interval_seconds=args.min_interval)
    return settings


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        settings = apply_overrides(load_settings(), args)
        settings.ensure_directories()
        return asyncio.run(run_command(settings, args))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
