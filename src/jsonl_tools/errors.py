"""
Exception types raised by record sources and datasets.
"""

from typing import Optional


class JsonlToolsError(Exception):
    """Base class for all errors raised by jsonl-tools."""


class SourceIOError(JsonlToolsError, OSError):
    """The record source could not be read (missing file, unreachable host)."""


class SourceParseError(JsonlToolsError, ValueError):
    """A record's raw text is not valid JSON."""

    def __init__(self, source: str, message: str, line: Optional[int] = None):
        self.source = source
        self.line = line
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"Invalid JSON in {location}: {message}")


class UnsupportedSourceError(JsonlToolsError, NotImplementedError):
    """The record source does not implement the requested operation."""


class RecordIndexError(JsonlToolsError, IndexError):
    """A record index is outside the current dataset."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of bounds for {length} records")
