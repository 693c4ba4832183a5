"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Per-search DEBUG lines are noisy; they stay hidden unless asked for.
_SEARCH_LOGGERS = ("tactics.movement.pathfinding", "tactics.movement.reachability")


def setup_logging(level: str = "INFO", stream: TextIO | None = None, trace_search: bool = False) -> None:
    """Configure the root logger for battle output.

    At DEBUG the movement searches still log at INFO unless *trace_search*
    is set.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    search_level = logging.NOTSET if trace_search else max(numeric_level, logging.INFO)
    for name in _SEARCH_LOGGERS:
        logging.getLogger(name).setLevel(search_level)
