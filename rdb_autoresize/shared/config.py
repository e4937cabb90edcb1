"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

CONFIG_ENV_VAR = "RDB_AUTORESIZE_CONFIG"


def get_config_path(config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Resolve the configuration file path.

    Args:
        config_path: Explicit path. If None, uses RDB_AUTORESIZE_CONFIG.

    Returns:
        Path to the configuration file, or None when no file is configured.
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR)
    if not config_path:
        return None
    return Path(config_path)


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load .env file first.

    Returns:
        Configuration dictionary, empty when no file is configured.

    Raises:
        FileNotFoundError: If a configured file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValueError: If the top level of the file is not a mapping.
    """
    if load_env:
        load_dotenv()

    path = get_config_path(config_path)
    if path is None:
        return {}

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def getenv_bool(key: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
