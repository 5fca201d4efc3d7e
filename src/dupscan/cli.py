"""CLI argument parsing, validation and duplicate reporting."""

from __future__ import annotations

from collections.abc import Sequence
from dupscan.aggregator import duplicates
from dupscan.aggregator import DuplicateGroups
from dupscan.config import load_config
from dupscan.config import merge_config_into_args
from dupscan.hasher import hash_file
from dupscan.logging import configure_logging
from dupscan.pool import find_duplicates_concurrently
from dupscan.scanner import find_files
from functools import partial
from tqdm import tqdm

import argparse
import logging
import os
import shlex
import sys


logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dupscan",
        description="Find files with identical content under one or more directories.",
    )
    parser.add_argument("roots", nargs="+", metavar="DIRECTORY", help="Directory to scan")
    parser.add_argument(
        "-j", "--workers",
        type=_positive_int,
        default=None,
        help="Number of files hashed in parallel (default: CPU count)",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=None,
        metavar="BYTES",
        help="Read buffer size for hashing (default: 4096)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", default=None, help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", default=None, help="Only show warnings and errors")
    return parser


def validate_roots(roots: Sequence[str]) -> None:
    """Check that at least one root is given and every root is a directory."""
    if not roots:
        raise ValueError("expected 1 or more directories")
    for root in roots:
        if not os.path.exists(root):
            raise FileNotFoundError(f"{root} does not exist")
        if not os.path.isdir(root):
            raise NotADirectoryError(f"{root} is not a directory")


def format_groups(groups: DuplicateGroups) -> list[str]:
    """Render each duplicate group as one line of sorted, shell-quoted paths.

    Lines are sorted by their first path. Single-member groups are dropped.
    """
    rows = sorted(sorted(paths) for paths in duplicates(groups).values())
    return [" ".join(shlex.quote(p) for p in row) for row in rows]


def cmd_scan(args: argparse.Namespace) -> None:
    """Find and print duplicate files beneath args.roots."""
    validate_roots(args.roots)

    logger.info(f"Scanning {len(args.roots)} director{'y' if len(args.roots) == 1 else 'ies'} ...")
    files = find_files(args.roots)
    logger.info(f"Found {len(files)} file(s)")
    if not files:
        return

    hasher = partial(hash_file, chunk_size=args.chunk_size)
    with tqdm(total=len(files), desc="Hashing", unit="file", disable=args.quiet) as bar:
        groups = find_duplicates_concurrently(
            files,
            workers=args.workers,
            hasher=hasher,
            progress=lambda _result: bar.update(),
        )

    lines = format_groups(groups)
    if not lines:
        logger.info("No duplicates found.")
        return

    logger.info(f"Found {len(lines)} duplicate group(s):")
    for line in lines:
        print(line)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    merge_config_into_args(args, load_config())
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        cmd_scan(args)
    except (OSError, ValueError) as exc:
        logger.error(f"error: {exc}")
        sys.exit(1)
