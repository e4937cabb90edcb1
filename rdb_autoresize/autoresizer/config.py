"""Configuration for the autoresize service."""

import logging
import os
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from rdb_autoresize.shared.config import load_yaml_config
from rdb_autoresize.shared.units import parse_duration, parse_size
from .errors import ConfigError

logger = logging.getLogger(__name__)

REJECTION_SKIP = "skip"
REJECTION_EXIT = "exit"
REJECTION_POLICIES = (REJECTION_SKIP, REJECTION_EXIT)

MIN_TRIGGER_PERCENT = 80.0
MAX_TRIGGER_PERCENT = 100.0

# Environment variable -> config field
ENV_VARS = {
    "RDB_TRIGGER_PERCENTAGE": "trigger_percent",
    "RDB_VOLUME_SIZE_LIMIT": "size_limit_bytes",
    "RDB_VOLUME_SIZE_INCREMENT": "increment_bytes",
    "RDB_POLL_INTERVAL": "poll_interval",
    "RDB_QUERY_TIMEOUT": "query_timeout",
    "RDB_METRIC_WINDOW": "metric_window",
    "RDB_REJECTION_POLICY": "rejection_policy",
    "RDB_PROVIDER": "provider",
}

# Older names, read only when the RDB_ variable is unset
LEGACY_ENV_VARS = {
    "SCW_RDB_TRIGGER_PERCENTAGE": "trigger_percent",
    "SCW_RDB_VOLUME_SIZE_LIMIT": "size_limit_bytes",
}

# YAML keys that differ from field names
YAML_ALIASES = {
    "trigger_percentage": "trigger_percent",
    "volume_size_limit": "size_limit_bytes",
    "volume_size_increment": "increment_bytes",
}


@dataclass(frozen=True)
class AutoResizeConfig:
    """Immutable settings for one autoresizer process.

    Built once at startup and passed to every component that needs it.
    Construction validates all invariants and raises ConfigError.
    """

    trigger_percent: float = 90.0
    size_limit_bytes: int = 0
    increment_bytes: int = 5 * 10**9
    poll_interval: float = 300.0  # seconds
    query_timeout: float = 60.0  # seconds
    metric_name: str = "disk_usage_percent"
    metric_window: float = 300.0  # seconds

    # What to do when a resize is warranted but ineligible or over the limit
    rejection_policy: str = REJECTION_SKIP

    provider: str = "dummy"
    provider_options: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "provider_options", MappingProxyType(dict(self.provider_options))
        )
        if not MIN_TRIGGER_PERCENT <= self.trigger_percent < MAX_TRIGGER_PERCENT:
            raise ConfigError(
                f"trigger percent must be between {MIN_TRIGGER_PERCENT:g} and "
                f"{MAX_TRIGGER_PERCENT:g}, got {self.trigger_percent:g}"
            )
        if self.size_limit_bytes <= 0:
            raise ConfigError("volume size limit is zero, no resize can happen")
        if self.increment_bytes <= 0:
            raise ConfigError("volume size increment must be positive")
        for name in ("poll_interval", "query_timeout", "metric_window"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.rejection_policy not in REJECTION_POLICIES:
            raise ConfigError(
                f"rejection policy must be one of {', '.join(REJECTION_POLICIES)}, "
                f"got {self.rejection_policy!r}"
            )
        if not self.provider:
            raise ConfigError("provider must be set")

    @property
    def fatal_rejections(self) -> bool:
        return self.rejection_policy == REJECTION_EXIT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoResizeConfig":
        """Create config from a dictionary of raw (possibly string) values."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, raw in data.items():
            name = YAML_ALIASES.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            if raw is None:
                continue
            values[name] = _convert(name, raw)

        return cls(**values)


def _convert(name: str, raw: Any) -> Any:
    try:
        if name == "trigger_percent":
            if isinstance(raw, bool):
                raise ValueError(raw)
            return float(raw)
        if name in ("size_limit_bytes", "increment_bytes"):
            return parse_size(raw)
        if name in ("poll_interval", "query_timeout", "metric_window"):
            return parse_duration(raw)
        if name == "provider_options":
            if not isinstance(raw, Mapping):
                raise ValueError("provider_options must be a mapping")
            return dict(raw)
        return str(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {name}: {raw!r} ({e})") from e


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AutoResizeConfig:
    """Load configuration from YAML file, environment and overrides.

    Precedence, lowest first: defaults, YAML file, legacy SCW_RDB_*
    environment names, RDB_* environment, overrides.

    Args:
        config_path: Path to YAML config file. If not provided, looks for
                    RDB_AUTORESIZE_CONFIG, then uses defaults only.
        overrides: Values from the command line; None entries are ignored.
        environ: Environment mapping, defaults to os.environ.

    Returns:
        AutoResizeConfig instance.

    Raises:
        ConfigError: If any source is unreadable or a value is invalid.
    """
    try:
        data: Dict[str, Any] = dict(load_yaml_config(config_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"unable to load config file: {e}") from e

    # Read after load_yaml_config so .env values are visible
    if environ is None:
        environ = os.environ

    for env_var, name in LEGACY_ENV_VARS.items():
        value = environ.get(env_var)
        if value:
            data[name] = value

    for env_var, name in ENV_VARS.items():
        value = environ.get(env_var)
        if value:
            data[name] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    return AutoResizeConfig.from_dict(data)
