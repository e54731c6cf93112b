"""Logging setup for the command line."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ffrecipe.logging.handlers import JSONFormatter

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Marks the handler this module installs so reconfiguring replaces it
_HANDLER_NAME = "ffrecipe-stderr"


def configure_logging(
    level: str | int = "WARNING",
    log_format: str = "text",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route ffrecipe logs to stderr.

    Stdout is left alone: prober output and ``info`` reports go there.
    Calling this again replaces the handler installed earlier.

    Args:
        level: Level name or number for the ``ffrecipe`` logger.
        log_format: ``text`` for human-readable lines, ``json`` for one
            JSON object per line.
        stream: Destination, ``sys.stderr`` by default.

    Returns:
        The installed handler.
    """
    logger = logging.getLogger("ffrecipe")
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return handler
