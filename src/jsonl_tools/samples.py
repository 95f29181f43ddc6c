"""
Named in-memory datasets, selectable from the CLI with ``--memory NAME``.
"""

from typing import Dict, List

from .readers import MemoryJsonlReader

SAMPLES: Dict[str, List[str]] = {
    "users": [
        '{"id": 1, "name": "Ada", "email": "ada@example.com", "address": {"city": "London", "zip": "N1"}}',
        '{"id": 2, "name": "Grace", "email": "grace@example.com", "address": {"city": "Arlington"}}',
        '{"id": 3, "name": "Linus", "address": {"city": "Helsinki", "zip": "00100"}, "tags": ["admin", "ops"]}',
        '{"id": 4, "name": "Margaret", "email": "margaret@example.com"}',
    ],
    "events": [
        '{"type": "click", "ts": 1719700000, "target": {"id": "btn-1"}}',
        '{"type": "click", "ts": 1719700005, "target": {"id": "btn-2"}}',
        '{"type": "view", "ts": 1719700010, "page": "/home"}',
        '{"type": "click", "ts": 1719700020, "target": {"id": "btn-1", "label": "Buy"}}',
        '{"type": "error", "ts": 1719700030, "error": {"code": 500, "trace": ["a.py", "b.py"]}}',
    ],
    "mixed": [
        '{"a": 1}',
        '{"a": 1, "b": 2}',
        '[1, 2, 3]',
        '"just a string"',
        '{}',
    ],
}


def sample_names() -> List[str]:
    return sorted(SAMPLES)


def load_sample(name: str) -> MemoryJsonlReader:
    """Build a reader for a named sample. Raises KeyError for unknown names."""
    if name not in SAMPLES:
        raise KeyError(f"Unknown sample dataset {name!r} (available: {', '.join(sample_names())})")
    return MemoryJsonlReader.from_strings(name, SAMPLES[name])
