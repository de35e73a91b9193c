#!/usr/bin/env python3
"""CLI entry point for watchlog.

Parse an anime watch log and print a per-show summary.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ErrorPolicy, load_config
from .errors import ConfigError, WatchLogError
from .formatter import format_store_markdown, store_to_dict
from .ingest import LogIngester
from .parser import read_log
from .store import InMemoryShowStore


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------


def _create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="watchlog",
        description="Parse an anime watch log into per-show watch sessions.",
    )
    parser.add_argument(
        "log_file",
        type=str,
        help="Path to the watch log, or - to read standard input",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: ./watchlog.yaml)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first line that cannot be parsed",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


# ---------------------------------------------------------------------------
# Main Entry Point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Run the watchlog CLI.

    Usage:
        watchlog <log.txt>                 # Markdown summary
        watchlog --format json <log.txt>   # JSON report
        cat log.txt | watchlog -           # Read from stdin
    """
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.strict:
        config.on_error = ErrorPolicy.ABORT

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.log_file != "-" and not Path(args.log_file).exists():
        print(f"Error: File not found: {args.log_file}", file=sys.stderr)
        sys.exit(1)

    store = InMemoryShowStore()
    ingester = LogIngester(store, config)
    try:
        ingester.ingest(read_log(args.log_file))
    except WatchLogError:
        # Strict mode: the failing line is already in the diagnostics
        pass

    if args.format == "json":
        print(json.dumps(store_to_dict(store), indent=2, ensure_ascii=False))
    else:
        print(format_store_markdown(store))

    for diagnostic in ingester.result.diagnostics:
        print(diagnostic, file=sys.stderr)
    if not ingester.result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
