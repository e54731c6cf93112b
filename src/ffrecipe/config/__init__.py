"""Configuration loading and models."""

from ffrecipe.config.loader import get_config, get_default_config_path
from ffrecipe.config.models import AppConfig

__all__ = ["AppConfig", "get_config", "get_default_config_path"]
