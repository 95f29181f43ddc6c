"""
Command-line interface for jsonl-tools.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

console = Console()

logger = logging.getLogger("jsonl_tools.cli")

DEFAULT_TOP_N = 5


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonl-tools",
        description="Profile the structure of a JSON Lines dataset: key paths, frequencies and schema drift",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $JSONL_TOOLS_LOG_LEVEL or INFO)",
    )

    source = parser.add_argument_group("data source")
    selector = source.add_mutually_exclusive_group()
    selector.add_argument("--filename", help="Local JSON Lines (or JSON array) file")
    selector.add_argument("--url", help="Remote JSON Lines location")
    selector.add_argument("--memory", metavar="NAME", help="Named in-memory sample dataset")
    source.add_argument(
        "--format",
        choices=["auto", "lines", "array"],
        default="auto",
        help="File format; auto picks 'array' for .json files and 'lines' otherwise (default: auto)",
    )
    source.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while loading files",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands (default: profile)")

    # Profile command
    profile_parser = subparsers.add_parser("profile", help="Print key, frequency and combination reports")
    profile_parser.add_argument(
        "-n", "--top",
        type=positive_int,
        default=DEFAULT_TOP_N,
        help=f"Number of key combinations to show (default: {DEFAULT_TOP_N})",
    )

    # Keys command
    subparsers.add_parser("keys", help="Print the number of unique key paths")

    # Frequencies command
    subparsers.add_parser("freqs", help="Print the key frequency table and rows with missing keys")

    # Combinations command
    combos_parser = subparsers.add_parser("combos", help="Print the most frequent top-level key combinations")
    combos_parser.add_argument(
        "-n", "--top",
        type=positive_int,
        default=DEFAULT_TOP_N,
        help=f"Number of combinations to show (default: {DEFAULT_TOP_N})",
    )

    # Record command
    record_parser = subparsers.add_parser("record", help="Show one record and the keys it is missing")
    record_parser.add_argument("record_id", type=int, help="Zero-based record index")

    return parser


def build_reader(args: argparse.Namespace):
    """
    Pick the record source from the CLI selector.
    Returns None when no selector was given.
    """
    from jsonl_tools.readers import FileJsonlReader, HttpJsonlReader, JsonArrayFileReader
    from jsonl_tools.samples import load_sample

    if args.filename:
        path = Path(args.filename)
        fmt = args.format
        if fmt == "auto":
            fmt = "array" if path.suffix.lower() == ".json" else "lines"
        if fmt == "array":
            return JsonArrayFileReader(path, show_progress=args.progress)
        return FileJsonlReader(path, show_progress=args.progress)
    if args.url:
        return HttpJsonlReader(args.url)
    if args.memory:
        return load_sample(args.memory)
    return None


def run_command(data, args: argparse.Namespace) -> None:
    from jsonl_tools import report

    command = args.command or "profile"
    if command == "profile":
        report.show_keys_found_report(data)
        report.show_keys_frequencies_report(data)
        report.show_top_key_combinations_report(data, getattr(args, "top", DEFAULT_TOP_N))
    elif command == "keys":
        report.show_keys_found_report(data)
    elif command == "freqs":
        report.show_keys_frequencies_report(data)
    elif command == "combos":
        report.show_top_key_combinations_report(data, args.top)
    elif command == "record":
        report.show_record(data, args.record_id)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from jsonl_tools import __version__
        console.print(f"jsonl-tools version {__version__}")
        return 0

    from jsonl_tools.log import configure_logging

    try:
        configure_logging(args.log_level)
    except ValueError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 2

    # Import here to avoid slow startup for --help
    from jsonl_tools import JsonlData, JsonlToolsError, __version__

    logger.info("Welcome to jsonl-tools (Version %s)!", __version__)

    try:
        reader = build_reader(args)
    except KeyError as e:
        console.print(f"[bold red]Error: {escape(e.args[0])}[/bold red]")
        return 1
    if reader is None:
        logger.error("No data source provided: use --filename, --url or --memory.")
        return 1

    try:
        data = JsonlData(reader)
        run_command(data, args)
    except JsonlToolsError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
