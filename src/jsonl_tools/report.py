"""
Console reports for a loaded dataset.

These functions only read the cached analysis on ``JsonlData``; none of them
trigger a recompute.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .dataset import JsonlData

logger = logging.getLogger(__name__)

console = Console()


def show_keys_found_report(data: JsonlData, out: Optional[Console] = None):
    out = out or console
    out.rule()
    out.print(
        f"Found [bold cyan]{data.analysis.unique_key_count:,}[/bold cyan] unique JSON keys "
        f"in {escape(data.source_name)}",
        highlight=False,
    )


def show_keys_frequencies_report(data: JsonlData, out: Optional[Console] = None):
    out = out or console
    out.rule()

    table = Table(title=f"Key Frequencies in {escape(data.source_name)}")
    table.add_column("Key", style="cyan")
    table.add_column("Count", style="magenta", justify="right")
    table.add_column("Coverage", style="green", justify="right")

    coverage = data.analysis.coverage()
    for key, count in data.key_freqs:
        table.add_row(Text(key), f"{count:,}", f"{coverage.get(key, 0.0):.1%}")

    out.print(table)
    out.print(f"Rows with missing keys: {list(data.rows_with_missing_keys)}", highlight=False, markup=False)


def show_top_key_combinations_report(data: JsonlData, n: int, out: Optional[Console] = None):
    out = out or console
    out.print(f"[bold]Top {n} Most Frequent JSON Key combinations in {escape(data.source_name)}[/bold]")

    combos = data.top_key_combinations(n)
    if not combos:
        logger.warning("No JSON key combinations found.")
        return

    for i, (keys, count) in enumerate(combos, start=1):
        keys_str = f"({', '.join(keys)})"
        suffix = "" if count == 1 else "s"
        out.print(f"{i}. {keys_str} - {count:,} occurrence{suffix}", highlight=False, markup=False)


def show_record(data: JsonlData, record_id: int, out: Optional[Console] = None):
    out = out or console
    detail = data.record_detail(record_id)
    if detail is None:
        logger.error("Record %d not found", record_id)
        return

    out.print(f"Analysis of Record {record_id}: {detail.text}", highlight=False, markup=False)
    if detail.missing_keys:
        logger.warning("Missing keys in this record: %s", list(detail.missing_keys))
    else:
        out.print("This record contains all keys found in the dataset.")
