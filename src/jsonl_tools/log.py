"""
Process-wide logging setup: stdlib logging rendered through rich.
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "JSONL_TOOLS_LOG_LEVEL"


def resolve_level(level: Optional[Union[int, str]] = None) -> int:
    """An explicit level wins, then $JSONL_TOOLS_LOG_LEVEL, then INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def configure_logging(level: Optional[Union[int, str]] = None, stderr: bool = True) -> None:
    console = Console(stderr=stderr)
    logging.basicConfig(
        level=resolve_level(level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
