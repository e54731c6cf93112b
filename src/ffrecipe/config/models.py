"""Application configuration model."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogFormat = Literal["text", "json"]

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class AppConfig(BaseModel):
    """Resolved configuration for one run.

    Attributes:
        ffmpeg_path: Encoder executable; PATH is searched when unset.
        ffprobe_path: Prober executable; PATH is searched when unset.
        output_dir: Directory for default output paths; the input's
            directory when unset.
        overwrite: Replace existing outputs instead of refusing.
        progress_interval_ms: Minimum time between progress line rewrites.
        log_level: Root log level name.
        log_format: ``text`` or ``json``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None
    output_dir: Path | None = None
    overwrite: bool = False
    progress_interval_ms: int = Field(default=200, ge=0)
    log_level: str = "WARNING"
    log_format: LogFormat = "text"

    @field_validator("ffmpeg_path", "ffprobe_path", "output_dir")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ``~`` in configured paths."""
        return v.expanduser() if v is not None else None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{v}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
