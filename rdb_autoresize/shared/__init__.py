"""Shared utilities for the autoresize service."""

from .config import getenv_bool, get_config_path, load_yaml_config
from .logging import log_event, setup_logging
from .units import format_size, parse_duration, parse_size

__all__ = [
    "getenv_bool",
    "get_config_path",
    "load_yaml_config",
    "log_event",
    "setup_logging",
    "format_size",
    "parse_duration",
    "parse_size",
]
