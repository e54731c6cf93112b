"""Structured logging for ffrecipe.

Provides configurable stderr logging with JSON format support.
"""

from ffrecipe.logging.config import configure_logging
from ffrecipe.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
