"""Logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger for generator output.

    Logs go to stdout by default. ``render`` passes stderr so the
    printed map stays clean when piped.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)
