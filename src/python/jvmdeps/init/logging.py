# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import sys
import warnings
from contextlib import contextmanager
from logging import Formatter, LogRecord
from typing import Iterator, TextIO

from colors import red, yellow

from jvmdeps.util.logging import LogLevel

# Although logging supports the WARN level, its not documented and could conceivably be yanked.
# Setup a 'WARN' logging level name that maps to 'WARNING'.
logging.addLevelName(logging.WARNING, "WARN")

ROOT_LOGGER_NAME = "jvmdeps"


class _ConsoleFormatter(Formatter):
    """Renders `[jvmdeps] message`, tagging and coloring warnings and errors."""

    def __init__(self, *, use_color: bool) -> None:
        super().__init__(None)
        self.use_color = use_color

    def format(self, record: LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            message = f"[ERROR] {message}"
            if self.use_color:
                message = red(message)
        elif record.levelno >= logging.WARNING:
            message = f"[WARN] {message}"
            if self.use_color:
                message = yellow(message)
        return f"[jvmdeps] {message}"


@contextmanager
def initialize_logging(
    level: LogLevel = LogLevel.INFO,
    *,
    use_color: bool | None = None,
    stream: TextIO | None = None,
) -> Iterator[logging.Handler]:
    """Installs a stderr handler for all `jvmdeps` loggers for the duration of the block.

    If `use_color` is None, color is used when the stream is a TTY.
    """
    stream = stream or sys.stderr
    if use_color is None:
        use_color = stream.isatty()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_ConsoleFormatter(use_color=use_color))
    original_level = logger.level
    original_propagate = logger.propagate

    logger.addHandler(handler)
    level.set_level_for(logger)
    logger.propagate = False
    # This routes warnings through our loggers instead of straight to raw stderr.
    original_showwarning = warnings.showwarning
    logging.captureWarnings(True)
    try:
        yield handler
    finally:
        # Leave warnings captured if they already were before this block.
        if warnings.showwarning is not original_showwarning:
            logging.captureWarnings(False)
        logger.removeHandler(handler)
        logger.setLevel(original_level)
        logger.propagate = original_propagate
