"""Command line interface for counting a word across web pages."""

from __future__ import annotations

import argparse
from typing import List, Optional

from spinarak.config import load_config
from spinarak.logging_setup import configure_logging
from spinarak.pipeline import run_pipeline

DESCRIPTION = """\
Fetch one or more URLs given as positional arguments and print the number
of times the target word appears on each page.
"""


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command line interface."""
    p = argparse.ArgumentParser(
        usage="%(prog)s [options] URL1 [URL2 [URL3 ...]]",
        description=DESCRIPTION,
    )
    p.add_argument(
        "--word",
        default="",
        help="The word to search for.",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="The number of workers to use (default: $SPINARAK_WORKERS or 1).",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to $LOG_LEVEL or WARNING.",
    )
    p.add_argument("links", nargs="*", metavar="URL", help="Page to fetch; repeat for more pages.")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    """Parse *argv*, run the worker pool and print one block per link."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config()
    except ValueError as exc:
        parser.error(f"Invalid configuration: {exc}")
    configure_logging(args.log_level, default="WARNING")
    workers = config.workers if args.workers is None else args.workers

    if not args.word:
        parser.error("Need a word to process.")
    if workers < 1:
        parser.error("Number of workers must be greater than 0.")
    if not args.links:
        parser.error("Need links to process.")

    results, _ = run_pipeline(args.word, args.links, workers, config=config)
    for result in results:
        print(result)
