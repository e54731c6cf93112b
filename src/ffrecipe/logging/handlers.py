"""JSON log output for ffrecipe."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}

# Plan-level fields lifted out of ``context`` so runs can be filtered on them.
PROMOTED_KEYS: tuple[str, ...] = ("operation", "command", "step")


class JSONFormatter(logging.Formatter):
    """Render each record as a single-line JSON object.

    Keys are ``timestamp`` (UTC, ISO-8601), ``level``, ``logger`` and
    ``message``. The ``operation``, ``command`` and ``step`` extras that the
    compiler and engine attach become top-level keys. Remaining extras are
    nested under ``context``, and values JSON cannot encode are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        for key in PROMOTED_KEYS:
            if key in extras:
                entry[key] = extras.pop(key)
        if extras:
            entry["context"] = extras

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
