"""
The dataset handle: one record source plus its cached analysis.
"""

import copy
import json
import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterator, List, Optional, Tuple

from rich.console import Console

from . import analysis
from .analysis import KeyCombination, KeyFrequency, SchemaAnalysis
from .readers import JsonlReader

logger = logging.getLogger(__name__)

console = Console()


@dataclass(frozen=True)
class RecordDetail:
    """A single record prepared for display."""

    index: int
    record: Any
    text: str
    missing_keys: Tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        return not self.missing_keys


class JsonlData:
    """
    Loads a record source and keeps its structural analysis up to date.

    Construction loads the reader; if that fails the exception propagates and
    no instance is created. Every successful mutation recomputes the whole
    analysis and swaps it in at once. Records are copied on the way in and
    on the way out, so callers never hold an object the analysis was built on.

    Usage:
        data = JsonlData(FileJsonlReader("events.jsonl"))
        data.key_freqs
        data.rows_with_missing_keys
        data.replace_record(3, {"id": 3, "name": "fixed"})
    """

    def __init__(self, reader: JsonlReader):
        logger.info("Loading records from %s", reader.source_name)
        reader.load()
        self.reader = reader
        self._analysis = analysis.analyze(reader)
        logger.info(
            "Analyzed %d records: %d unique keys, %d rows with missing keys",
            len(reader),
            self._analysis.unique_key_count,
            len(self._analysis.rows_with_missing_keys),
        )

    # -- read accessors -------------------------------------------------

    @property
    def filename(self) -> str:
        return self.reader.source_name

    @property
    def source_name(self) -> str:
        return self.reader.source_name

    def __len__(self) -> int:
        return len(self.reader)

    def is_empty(self) -> bool:
        return self.reader.is_empty()

    def __iter__(self) -> Iterator[Any]:
        return (copy.deepcopy(record) for record in self.reader)

    def get(self, index: int) -> Optional[Any]:
        return copy.deepcopy(self.reader.get(index))

    @property
    def analysis(self) -> SchemaAnalysis:
        return self._analysis

    @property
    def keys_seen(self) -> FrozenSet[str]:
        return self._analysis.keys_seen

    @property
    def key_freqs(self) -> Tuple[KeyFrequency, ...]:
        return self._analysis.key_freqs

    @property
    def rows_with_missing_keys(self) -> Tuple[int, ...]:
        return self._analysis.rows_with_missing_keys

    # -- mutation -------------------------------------------------------

    def _recompute(self) -> None:
        self._analysis = analysis.analyze(self.reader)
        logger.debug("Recomputed analysis for %s", self.source_name)

    def replace_record(self, record_id: int, new_json: Any) -> None:
        """
        Overwrite one record and recompute the analysis.
        Raises RecordIndexError, leaving everything unchanged, if ``record_id``
        is out of range.
        """
        self.reader.replace(record_id, new_json)
        self._recompute()

    def append_record(self, new_json: Any) -> int:
        """Append a record, recompute the analysis and return the new index."""
        self.reader.push(new_json)
        self._recompute()
        return len(self.reader) - 1

    # -- reporting views --------------------------------------------------

    def top_key_combinations(self, n: int) -> List[KeyCombination]:
        return analysis.top_key_combinations(self.reader, n)

    def missing_keys_for(self, record_id: int) -> Optional[List[str]]:
        # A record can itself be JSON null, so check the range explicitly
        if not 0 <= record_id < len(self.reader):
            return None
        return analysis.missing_keys(self.reader.get(record_id), self.keys_seen)

    def record_detail(self, record_id: int) -> Optional[RecordDetail]:
        if not 0 <= record_id < len(self.reader):
            return None
        row = self.reader.get(record_id)
        try:
            text = json.dumps(row, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            text = "Invalid JSON row."
        return RecordDetail(
            index=record_id,
            record=copy.deepcopy(row),
            text=text,
            missing_keys=tuple(analysis.missing_keys(row, self.keys_seen)),
        )

    def key_frequency_frame(self):
        """
        Returns the frequency table as a pandas DataFrame with columns
        ``key``, ``count`` and ``coverage``.
        """
        try:
            import pandas as pd
        except ImportError:
            console.print("[bold red]pandas is required for DataFrame conversion. Please install it.[/bold red]")
            return None

        coverage = self._analysis.coverage()
        rows = [
            {"key": key, "count": count, "coverage": coverage.get(key, 0.0)}
            for key, count in self.key_freqs
        ]
        return pd.DataFrame(rows, columns=["key", "count", "coverage"])

    def __repr__(self) -> str:
        return f"JsonlData({self.source_name!r}, records={len(self)}, keys={self._analysis.unique_key_count})"
