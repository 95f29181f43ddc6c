"""
Record sources for jsonl-tools.

A record source supplies an ordered list of JSON values and supports
random-access reads, in-place replacement and appends. Analysis never looks
at how the records were obtained, so file, in-memory and network backends are
interchangeable.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

import ijson
from tqdm import tqdm

from .errors import RecordIndexError, SourceIOError, SourceParseError, UnsupportedSourceError

logger = logging.getLogger(__name__)


class JsonlReader(ABC):
    """
    Interface implemented by every record backend.

    Subclasses only need to provide ``load`` and ``source_name``; record
    storage and access are shared. Values passed in are deep-copied, so the
    reader never shares record objects with its caller.
    """

    def __init__(self, data: Optional[Iterable[Any]] = None):
        self._data: List[Any] = copy.deepcopy(list(data)) if data is not None else []

    @abstractmethod
    def load(self) -> None:
        """Materialize all records into memory."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable identifier used in diagnostics only."""

    def __len__(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return len(self) == 0

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._data)

    def get(self, index: int) -> Optional[Any]:
        if not self._in_range(index):
            return None
        return self._data[index]

    def get_mut(self, index: int) -> Optional[Any]:
        """
        Returns the live record object at ``index``.
        Changes made through it are not seen by any cached analysis.
        """
        return self.get(index)

    def replace(self, index: int, value: Any) -> None:
        if not self._in_range(index):
            raise RecordIndexError(index, len(self._data))
        self._data[index] = copy.deepcopy(value)

    def push(self, value: Any) -> None:
        self._data.append(copy.deepcopy(value))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_name!r}, records={len(self)})"


class FileJsonlReader(JsonlReader):
    """Newline-delimited JSON file, one record per non-blank line."""

    def __init__(self, path: str | Path, show_progress: bool = False):
        super().__init__()
        self.path = Path(path)
        self.show_progress = show_progress

    @property
    def source_name(self) -> str:
        return self.path.name

    def load(self) -> None:
        self._data = []
        records = []
        try:
            # utf-8-sig accepts files that start with a byte order mark
            with open(self.path, "r", encoding="utf-8-sig") as f:
                lines = tqdm(f, desc=f"Loading {self.source_name}", unit=" lines", disable=not self.show_progress)
                for line_no, line in enumerate(lines, start=1):
                    if not line.strip():
                        continue
                    try:
                        records.append(json.loads(line))
                    except json.JSONDecodeError as e:
                        raise SourceParseError(self.source_name, e.msg, line=line_no) from e
        except UnicodeDecodeError as e:
            raise SourceParseError(self.source_name, str(e)) from e
        except OSError as e:
            raise SourceIOError(f"Cannot read {self.path}: {e.strerror or e}") from e

        self._data = records
        logger.info("Loaded %d records from %s", len(records), self.source_name)


class JsonArrayFileReader(JsonlReader):
    """
    A single JSON document whose top level is an array of records.
    Elements are streamed with ijson so the raw text is never held in memory.
    """

    def __init__(self, path: str | Path, show_progress: bool = False):
        super().__init__()
        self.path = Path(path)
        self.show_progress = show_progress

    @property
    def source_name(self) -> str:
        return self.path.name

    def load(self) -> None:
        self._data = []
        try:
            with open(self.path, "rb") as f:
                _, event, _ = next(ijson.parse(f), ("", None, None))
                if event != "start_array":
                    raise SourceParseError(self.source_name, "top-level value is not an array")
            with open(self.path, "rb") as f:
                # use_float=True keeps numbers as floats instead of Decimal
                items = ijson.items(f, "item", use_float=True)
                records = list(tqdm(items, desc=f"Loading {self.source_name}", unit=" items",
                                    disable=not self.show_progress))
        except ijson.JSONError as e:
            raise SourceParseError(self.source_name, str(e)) from e
        except OSError as e:
            raise SourceIOError(f"Cannot read {self.path}: {e.strerror or e}") from e

        self._data = records
        logger.info("Loaded %d records from %s", len(records), self.source_name)


class MemoryJsonlReader(JsonlReader):
    """Records that are already in memory."""

    def __init__(self, name: str, data: Iterable[Any] = ()):
        super().__init__(data)
        self.name = name

    @classmethod
    def from_strings(cls, name: str, json_lines: Iterable[str]) -> "MemoryJsonlReader":
        """
        Parse raw JSON text lines. Blank lines are skipped; a malformed line
        raises SourceParseError here rather than from load().
        """
        data = []
        for line_no, line in enumerate(json_lines, start=1):
            if not line.strip():
                continue
            try:
                data.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise SourceParseError(name, e.msg, line=line_no) from e
        return cls(name, data)

    @property
    def source_name(self) -> str:
        return self.name

    def load(self) -> None:
        # Data is already in memory
        logger.debug("In-memory source %s holds %d records", self.name, len(self))


class HttpJsonlReader(JsonlReader):
    """
    Placeholder for records fetched over HTTP.
    load() always fails; everything else behaves like the in-memory reader.
    """

    def __init__(self, url: str):
        super().__init__()
        self.url = url

    @property
    def source_name(self) -> str:
        return self.url

    def load(self) -> None:
        logger.warning("HTTP reader not implemented, cannot load %s", self.url)
        raise UnsupportedSourceError(f"HTTP reader not yet implemented: {self.url}")
