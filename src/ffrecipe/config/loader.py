"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to ``get_config``)
2. Environment variables (FFRECIPE_*)
3. Config file (~/.ffrecipe/config.yaml)
4. Default values

Environment variables:
- FFRECIPE_FFMPEG_PATH: Path to ffmpeg executable
- FFRECIPE_FFPROBE_PATH: Path to ffprobe executable
- FFRECIPE_OUTPUT_DIR: Directory for default output paths
- FFRECIPE_OVERWRITE: Overwrite existing outputs (1/true/yes)
- FFRECIPE_PROGRESS_INTERVAL_MS: Progress refresh interval
- FFRECIPE_LOG_LEVEL: Log level name
- FFRECIPE_LOG_FORMAT: text or json
- FFRECIPE_CONFIG_PATH: Path to config file (overrides default location)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ffrecipe.config.models import AppConfig
from ffrecipe.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".ffrecipe"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

ENV_PREFIX = "FFRECIPE_"
CONFIG_PATH_ENV = "FFRECIPE_CONFIG_PATH"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def get_default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the config file path.

    Can be overridden by the FFRECIPE_CONFIG_PATH environment variable.
    """
    env = os.environ if environ is None else environ
    env_path = env.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> dict[str, Any]:
    """Load the YAML config file.

    Returns:
        Parsed mapping. Empty if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _parse_bool(name: str, value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def read_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect FFRECIPE_* overrides for the known config fields."""
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for field_name in AppConfig.model_fields:
        key = ENV_PREFIX + field_name.upper()
        raw = env.get(key)
        if raw is None:
            continue
        if field_name == "overwrite":
            values[field_name] = _parse_bool(key, raw)
        else:
            values[field_name] = raw
    return values


def get_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> AppConfig:
    """Build the configuration with full precedence handling.

    Args:
        config_path: Config file path (overrides FFRECIPE_CONFIG_PATH).
        environ: Environment mapping, ``os.environ`` when None.
        **overrides: CLI values; ``None`` means "not given".

    Returns:
        The merged, validated configuration.

    Raises:
        ConfigError: On an unreadable file or an invalid value.
    """
    path = config_path or get_default_config_path(environ)
    merged: dict[str, Any] = {}
    merged.update(load_config_file(path))
    merged.update(read_env(environ))
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AppConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
