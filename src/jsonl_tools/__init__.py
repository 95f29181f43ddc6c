"""
jsonl-tools - Structural profiling for JSON Lines datasets.

This library loads a collection of JSON records and reports every key path
that occurs in them, how often each occurs, the most common top-level key
combinations and which records are missing keys seen elsewhere.
"""

from .dataset import JsonlData, RecordDetail
from .analysis import SchemaAnalysis
from .errors import (
    JsonlToolsError,
    RecordIndexError,
    SourceIOError,
    SourceParseError,
    UnsupportedSourceError,
)
from .readers import (
    FileJsonlReader,
    HttpJsonlReader,
    JsonArrayFileReader,
    JsonlReader,
    MemoryJsonlReader,
)

__version__ = "0.1.0"

__all__ = [
    "JsonlData",
    "RecordDetail",
    "SchemaAnalysis",
    "JsonlReader",
    "FileJsonlReader",
    "JsonArrayFileReader",
    "MemoryJsonlReader",
    "HttpJsonlReader",
    "JsonlToolsError",
    "SourceIOError",
    "SourceParseError",
    "UnsupportedSourceError",
    "RecordIndexError",
    "__version__",
]
