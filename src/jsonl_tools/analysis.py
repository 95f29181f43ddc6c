"""
Structural analysis of a list of JSON records.

Everything here is a pure function of the records passed in. Nothing is
cached between calls; ``analyze`` builds a fresh ``SchemaAnalysis`` each time.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Sequence, Set, Tuple

KeyFrequency = Tuple[str, int]
KeyCombination = Tuple[Tuple[str, ...], int]


def _child_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def iter_key_paths(value: Any, prefix: str = "") -> Iterator[str]:
    """
    Yield the key path of every object field and array element below ``value``.

    Paths join field names with ``.`` and array positions with ``[i]``, e.g.
    ``user.addresses[0].city``. A node whose value is an array is not emitted
    itself; only its elements are. Scalars end the walk, so a scalar record
    produces no paths at all.

    The walk uses an explicit stack, so deeply nested records are not limited
    by the interpreter's recursion limit.
    """
    stack = [(prefix, value)]
    while stack:
        path, node = stack.pop()
        if isinstance(node, dict):
            children = ((_child_path(path, str(k)), v) for k, v in node.items())
        elif isinstance(node, list):
            children = ((f"{path}[{i}]", v) for i, v in enumerate(node))
        else:
            continue
        pending = []
        for child_path, child in children:
            if not isinstance(child, list):
                yield child_path
            pending.append((child_path, child))
        # Reverse so children are visited in document order
        stack.extend(reversed(pending))


def row_key_set(record: Any) -> FrozenSet[str]:
    """All key paths reachable within a single record."""
    return frozenset(iter_key_paths(record))


def sort_frequencies(counts: Dict[str, int]) -> List[KeyFrequency]:
    """Descending count, then ascending key path."""
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def key_frequencies(records: Iterable[Any]) -> List[KeyFrequency]:
    """
    Count, for every key path, the number of records containing it.

    Paths are deduplicated per record: a field named ``a.b`` and a nested
    ``a`` -> ``b`` spell the same path and count once for that record.
    """
    counts: Counter = Counter()
    for record in records:
        counts.update(row_key_set(record))
    return sort_frequencies(counts)


def keys_seen(frequencies: Iterable[KeyFrequency]) -> FrozenSet[str]:
    return frozenset(key for key, _ in frequencies)


def missing_keys(record: Any, all_keys: FrozenSet[str] | Set[str]) -> List[str]:
    """Key paths seen elsewhere in the dataset but absent from ``record``, sorted."""
    return sorted(set(all_keys) - row_key_set(record))


def rows_with_missing_keys(records: Iterable[Any], all_keys: FrozenSet[str] | Set[str]) -> List[int]:
    """Indices of records whose key set differs from ``all_keys``."""
    rows = []
    for i, record in enumerate(records):
        if not row_key_set(record) >= all_keys:
            rows.append(i)
    return rows


def key_combinations(records: Iterable[Any]) -> List[KeyCombination]:
    """
    Group object records by their sorted top-level field names.

    Returns every distinct fingerprint with its record count, most frequent
    first and ties ordered by the field-name sequence. Records that are not
    objects are skipped.
    """
    counts: Counter = Counter()
    for record in records:
        if isinstance(record, dict):
            counts[tuple(sorted(str(k) for k in record))] += 1
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def top_key_combinations(records: Iterable[Any], n: int) -> List[KeyCombination]:
    if n <= 0:
        return []
    return key_combinations(records)[:n]


@dataclass(frozen=True)
class SchemaAnalysis:
    """
    Result bundle for one pass over a dataset.

    Key set, frequency table and missing-key rows always come from the same
    pass, so they are consistent with each other.
    """

    record_count: int
    keys_seen: FrozenSet[str]
    key_freqs: Tuple[KeyFrequency, ...]
    rows_with_missing_keys: Tuple[int, ...]

    @property
    def unique_key_count(self) -> int:
        return len(self.keys_seen)

    def coverage(self) -> Dict[str, float]:
        """Share of records containing each key path, between 0.0 and 1.0."""
        if not self.record_count:
            return {}
        return {key: count / self.record_count for key, count in self.key_freqs}


def analyze(records: Sequence[Any]) -> SchemaAnalysis:
    """Run the full analysis over ``records``."""
    freqs = key_frequencies(records)
    all_keys = keys_seen(freqs)
    return SchemaAnalysis(
        record_count=len(records),
        keys_seen=all_keys,
        key_freqs=tuple(freqs),
        rows_with_missing_keys=tuple(rows_with_missing_keys(records, all_keys)),
    )
