#!/usr/bin/env python3
"""
posturectl - Posture Sentinel operational CLI

A lightweight CLI for computing posture snapshots:
- Compute from files or an HTTP API (posturectl compute)
- Compute from simulated datasets (posturectl simulate)
- List dataset files found in a directory (posturectl datasets)
- Version info (posturectl version)
"""

import argparse
import asyncio
import json
import logging
import sys

from posture_sentinel import __version__
from posture_sentinel.core.config import get_config
from posture_sentinel.core.errors import DataUnavailableError
from posture_sentinel.ingest.loader import (
    DATASETS,
    DatasetLoader,
    FileDatasetLoader,
    InMemoryDatasetLoader,
    create_loader,
    list_available,
)
from posture_sentinel.ingest.simulated import generate_datasets
from posture_sentinel.snapshot.formatters import SECTION_TITLES, snapshot_to_cards
from posture_sentinel.snapshot.models import AggregationReport
from posture_sentinel.snapshot.service import PostureService

EXIT_DATA_UNAVAILABLE = 2


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def format_report(report: AggregationReport, width: int = 40) -> str:
    """Render a report as card lines grouped by section."""
    lines = []
    section = None
    for card in snapshot_to_cards(report.snapshot):
        if card.section != section:
            section = card.section
            if lines:
                lines.append("")
            lines.append(colorize(SECTION_TITLES[section], Colors.BOLD))
            lines.append(colorize("=" * 60, Colors.BOLD))
        padding = " " * max(1, width - len(card.title))
        lines.append(f"{card.title}:{padding}{card.display}")

    if report.skipped_records:
        lines.append("")
        skipped = ", ".join(f"{k}={v}" for k, v in report.skipped_records.items())
        lines.append(colorize(f"Skipped malformed records: {skipped}", Colors.YELLOW))
    if report.unavailable_datasets:
        lines.append(
            colorize(f"Unavailable datasets: {', '.join(report.unavailable_datasets)}", Colors.YELLOW)
        )
    return "\n".join(lines)


async def _run(loader: DatasetLoader, as_json: bool) -> int:
    async with loader:
        service = PostureService(loader=loader)
        try:
            report = await service.run_once()
        except DataUnavailableError as e:
            print(colorize(f"✗ Data unavailable: {e}", Colors.RED), file=sys.stderr)
            return EXIT_DATA_UNAVAILABLE

    if as_json:
        print(report.model_dump_json(indent=2))
    else:
        print(format_report(report))
    return 0


def cmd_compute(args) -> int:
    """
    Compute a snapshot from a data directory or HTTP API.

    Returns:
        Exit code (0 on success, 2 when no data is available)
    """
    loader = _compute_loader(args)
    return asyncio.run(_run(loader, args.json))


def _compute_loader(args) -> DatasetLoader:
    """Loader for compute; an explicit --data-dir overrides the configured URL."""
    config = get_config()
    if args.url:
        base_url = args.url
    elif args.data_dir:
        base_url = None
    else:
        base_url = config.source.base_url
    return create_loader(
        data_dir=args.data_dir or config.source.data_dir,
        base_url=base_url,
        timeout=args.timeout or config.source.timeout,
    )


def cmd_simulate(args) -> int:
    """Compute a snapshot from simulated datasets."""
    loader = InMemoryDatasetLoader(generate_datasets(seed=args.seed))
    return asyncio.run(_run(loader, args.json))


def cmd_datasets(args) -> int:
    """List dataset files found in a data directory."""
    loader = FileDatasetLoader(args.data_dir or get_config().source.data_dir)
    found = set(list_available(loader))
    for name in DATASETS:
        if name in found:
            print(f"{name:<24}{colorize('[OK]', Colors.GREEN)} {loader.find_file(name)}")
        else:
            print(f"{name:<24}{colorize('[MISSING]', Colors.YELLOW)}")
    return 0 if found else EXIT_DATA_UNAVAILABLE


def cmd_version(args) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"posturectl version {__version__}")
    print("Posture Sentinel - Security posture KPI aggregation")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for posturectl."""
    parser = argparse.ArgumentParser(
        description="Posture Sentinel operational CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  posturectl compute --data-dir ./data     # Snapshot from dataset files
  posturectl compute --url http://cmdb/api # Snapshot from an HTTP API
  posturectl simulate --seed 42            # Snapshot from simulated data
  posturectl datasets --data-dir ./data    # List dataset files
  posturectl version                       # Show version information

Environment variables:
  POSTURE_SOURCE_DATA_DIR                  # Default data directory
  POSTURE_SOURCE_BASE_URL                  # Default dataset API URL
  POSTURE_METRICS_EMPTY_RATIO_VALUE        # Value for empty populations (default: 0)
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from LOG_LEVEL / config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # compute command
    compute_parser = subparsers.add_parser(
        "compute",
        help="Compute a snapshot from dataset files or an HTTP API",
    )
    compute_parser.add_argument("--data-dir", help="Directory holding dataset files")
    compute_parser.add_argument("--url", help="Base URL of the dataset API")
    compute_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout for HTTP requests in seconds",
    )
    compute_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    # simulate command
    simulate_parser = subparsers.add_parser(
        "simulate",
        help="Compute a snapshot from simulated datasets",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    # datasets command
    datasets_parser = subparsers.add_parser(
        "datasets",
        help="List dataset files found in a data directory",
    )
    datasets_parser.add_argument("--data-dir", help="Directory holding dataset files")

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def main(argv=None):
    """Main entry point for posturectl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_config().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "compute":
        return cmd_compute(args)
    elif args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "datasets":
        return cmd_datasets(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
